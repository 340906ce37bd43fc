"""Employee DTOs."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from hr_api.models.domain.employee import EmployeeStatus


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: int
    full_name: str
    email: EmailStr
    phone: str | None = None
    avatar_url: str | None = None
    status: EmployeeStatus
    created_at: datetime
    department_id: int | None = None
    department_name: str | None = None
    position_id: int | None = None
    position_title: str | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    total: int


class EmployeeCreate(BaseModel):
    """DTO for creating an employee."""

    full_name: str = Field(min_length=1, max_length=100, description="Full name of the employee")
    email: EmailStr = Field(max_length=100, description="Employee email address")
    phone: str | None = Field(default=None, max_length=20)
    avatar_url: str | None = Field(default=None, max_length=500)
    department_id: int | None = Field(default=None, ge=1)
    position_id: int | None = Field(default=None, ge=1)


class EmployeeUpdate(EmployeeCreate):
    """DTO for updating an employee.

    Replaces every editable field, like the create payload. Status is not
    editable here; use the set-active / set-on-leave actions.
    """
