"""Employees router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from hr_api.dependencies import get_employee_service
from hr_api.models.domain.employee import EmployeeStatus
from hr_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from hr_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    status_filter: Annotated[EmployeeStatus | None, Query(alias="status")] = None,
    department_id: Annotated[int | None, Query(ge=1)] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> EmployeeListResponse:
    """List employees with optional filters."""
    return await service.list_employees(
        status=status_filter,
        department_id=department_id,
        search=search,
        offset=offset,
        limit=limit,
    )


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee by ID."""
    return await service.get_employee(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: EmployeeCreate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee."""
    return await service.create_employee(data)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Replace an employee's details."""
    return await service.update_employee(employee_id, data)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee with their contracts and leave requests."""
    await service.delete_employee(employee_id)


@router.post("/{employee_id}/set-active", status_code=status.HTTP_204_NO_CONTENT)
async def set_employee_active(
    employee_id: int,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Mark an employee as active."""
    await service.set_active(employee_id)


@router.post("/{employee_id}/set-on-leave", status_code=status.HTTP_204_NO_CONTENT)
async def set_employee_on_leave(
    employee_id: int,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Mark an employee as on leave."""
    await service.set_on_leave(employee_id)
