"""Leave requests router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hr_api.dependencies import get_leave_request_service
from hr_api.models.dto.leave_request import (
    LeaveDecision,
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from hr_api.services.leave_request_service import LeaveRequestService

router = APIRouter()


@router.get(
    "/employees/{employee_id}/leave-requests",
    response_model=list[LeaveRequestResponse],
)
async def list_employee_leave_requests(
    employee_id: int,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> list[LeaveRequestResponse]:
    """List an employee's leave requests, latest start first."""
    return await service.list_for_employee(employee_id)


@router.post(
    "/employees/{employee_id}/leave-requests",
    response_model=LeaveRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_leave_request(
    employee_id: int,
    data: LeaveRequestCreate,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Create a leave request draft."""
    if data.employee_id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee ID mismatch between route and body",
        )
    return await service.create_draft(data)


@router.get("/leave-requests/{leave_request_id}", response_model=LeaveRequestResponse)
async def get_leave_request(
    leave_request_id: int,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Get a leave request by ID."""
    return await service.get_leave_request(leave_request_id)


@router.put("/leave-requests/{leave_request_id}", response_model=LeaveRequestResponse)
async def update_leave_request(
    leave_request_id: int,
    data: LeaveRequestUpdate,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Edit a draft leave request."""
    return await service.update_draft(leave_request_id, data)


@router.post("/leave-requests/{leave_request_id}/submit", response_model=LeaveRequestResponse)
async def submit_leave_request(
    leave_request_id: int,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Submit a draft for approval."""
    return await service.submit(leave_request_id)


@router.post("/leave-requests/{leave_request_id}/approve", response_model=LeaveRequestResponse)
async def approve_leave_request(
    leave_request_id: int,
    data: LeaveDecision,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Approve a submitted leave request."""
    return await service.approve(leave_request_id, data.approver_name)


@router.post("/leave-requests/{leave_request_id}/reject", response_model=LeaveRequestResponse)
async def reject_leave_request(
    leave_request_id: int,
    data: LeaveDecision,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Reject a submitted leave request."""
    return await service.reject(leave_request_id, data.approver_name)


@router.post("/leave-requests/{leave_request_id}/cancel", response_model=LeaveRequestResponse)
async def cancel_leave_request(
    leave_request_id: int,
    service: Annotated[LeaveRequestService, Depends(get_leave_request_service)],
) -> LeaveRequestResponse:
    """Cancel a submitted leave request."""
    return await service.cancel(leave_request_id)
