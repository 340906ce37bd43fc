"""Positions router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from hr_api.dependencies import get_position_service
from hr_api.models.dto.position import PositionCreate, PositionResponse
from hr_api.services.position_service import PositionService

router = APIRouter()


@router.get("", response_model=list[PositionResponse])
async def list_positions(
    service: Annotated[PositionService, Depends(get_position_service)],
    department_id: Annotated[int | None, Query(ge=1)] = None,
) -> list[PositionResponse]:
    """List positions, optionally filtered by department."""
    return await service.list_positions(department_id=department_id)


@router.get("/{position_id}", response_model=PositionResponse)
async def get_position(
    position_id: int,
    service: Annotated[PositionService, Depends(get_position_service)],
) -> PositionResponse:
    """Get a position by ID."""
    return await service.get_position(position_id)


@router.post("", response_model=PositionResponse, status_code=status.HTTP_201_CREATED)
async def create_position(
    data: PositionCreate,
    service: Annotated[PositionService, Depends(get_position_service)],
) -> PositionResponse:
    """Create a position."""
    return await service.create_position(data)


@router.put("/{position_id}", response_model=PositionResponse)
async def update_position(
    position_id: int,
    data: PositionCreate,
    service: Annotated[PositionService, Depends(get_position_service)],
) -> PositionResponse:
    """Replace a position's title and department."""
    return await service.update_position(position_id, data)


@router.delete("/{position_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_position(
    position_id: int,
    service: Annotated[PositionService, Depends(get_position_service)],
) -> None:
    """Delete a position."""
    await service.delete_position(position_id)
