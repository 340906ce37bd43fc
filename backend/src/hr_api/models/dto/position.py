"""Position DTOs."""

from pydantic import BaseModel, Field


class PositionCreate(BaseModel):
    """Create or replace a position."""

    title: str = Field(min_length=1, max_length=100)
    department_id: int = Field(ge=1)


class PositionResponse(BaseModel):
    """Position response with department name and headcount."""

    id: int
    title: str
    department_id: int
    department_name: str = ""
    employee_count: int = 0

    class Config:
        """Pydantic config."""

        from_attributes = True
