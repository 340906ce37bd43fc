"""Leave request DTOs."""

from datetime import date

from pydantic import BaseModel, Field

from hr_api.models.domain.leave import LeaveRequestStatus, LeaveType


class LeaveRequestCreate(BaseModel):
    """Create a leave request draft."""

    employee_id: int = Field(ge=1)
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str | None = Field(default=None, max_length=500)


class LeaveRequestUpdate(BaseModel):
    """Update a draft. Omitted fields keep their current value."""

    leave_type: LeaveType | None = None
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = Field(default=None, max_length=500)


class LeaveDecision(BaseModel):
    """Approve or reject a submitted leave request."""

    approver_name: str = Field(min_length=1, max_length=100)


class LeaveRequestResponse(BaseModel):
    """Leave request with the employee name resolved."""

    id: int
    employee_id: int
    employee_name: str = ""
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str | None = None
    status: LeaveRequestStatus
    approver_name: str | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True


class CompletedLeave(BaseModel):
    """A leave request transitioned to completed by the expiry sweep."""

    leave_request_id: int
    employee_id: int
    employee_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
