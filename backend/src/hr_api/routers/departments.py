"""Departments router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from hr_api.dependencies import get_department_service
from hr_api.models.dto.department import DepartmentCreate, DepartmentResponse
from hr_api.services.department_service import DepartmentService

router = APIRouter()


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentResponse]:
    """List all departments."""
    return await service.list_departments()


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Get a department by ID."""
    return await service.get_department(department_id)


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    data: DepartmentCreate,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Create a department."""
    return await service.create_department(data)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    data: DepartmentCreate,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    """Replace a department's name and manager."""
    return await service.update_department(department_id, data)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: int,
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Delete a department and its positions."""
    await service.delete_department(department_id)
