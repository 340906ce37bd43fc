"""Department DTOs."""

from pydantic import BaseModel, Field


class DepartmentCreate(BaseModel):
    """Create or replace a department."""

    name: str = Field(min_length=1, max_length=100)
    manager_id: int | None = Field(default=None, ge=1)


class DepartmentResponse(BaseModel):
    """Department response with manager name and headcount."""

    id: int
    name: str
    manager_id: int | None = None
    manager_name: str | None = None
    employee_count: int = 0

    class Config:
        """Pydantic config."""

        from_attributes = True
