"""Employment contracts router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hr_api.dependencies import get_contract_service
from hr_api.models.dto.contract import ContractCreate, ContractResponse
from hr_api.services.contract_service import ContractService

router = APIRouter()


@router.get("/employees/{employee_id}/contracts", response_model=list[ContractResponse])
async def list_employee_contracts(
    employee_id: int,
    service: Annotated[ContractService, Depends(get_contract_service)],
) -> list[ContractResponse]:
    """List an employee's active contracts, latest start first."""
    return await service.get_active_contracts_for_employee(employee_id)


@router.post(
    "/employees/{employee_id}/contracts",
    response_model=ContractResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contract(
    employee_id: int,
    data: ContractCreate,
    service: Annotated[ContractService, Depends(get_contract_service)],
) -> ContractResponse:
    """Create an employment contract for an employee."""
    if data.employee_id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee ID mismatch between route and body",
        )
    return await service.create_contract(data)


@router.get("/contracts/{contract_id}", response_model=ContractResponse)
async def get_contract(
    contract_id: int,
    service: Annotated[ContractService, Depends(get_contract_service)],
) -> ContractResponse:
    """Get a contract by ID."""
    return await service.get_contract(contract_id)
