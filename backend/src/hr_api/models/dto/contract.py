"""Employment contract DTOs."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from hr_api.models.domain.contract import ContractStatus, EmploymentType


class ContractCreate(BaseModel):
    """Create an employment contract."""

    employee_id: int = Field(ge=1)
    start_date: date
    end_date: date | None = None
    employment_type: EmploymentType
    base_salary: Decimal = Field(ge=0, max_digits=18, decimal_places=2)


class ContractResponse(BaseModel):
    """Employment contract with the employee name resolved."""

    id: int
    employee_id: int
    employee_name: str = ""
    start_date: date
    end_date: date | None = None
    employment_type: EmploymentType
    base_salary: Decimal
    status: ContractStatus

    class Config:
        """Pydantic config."""

        from_attributes = True


class EndedContract(BaseModel):
    """A contract transitioned to ended by the expiry sweep."""

    contract_id: int
    employee_id: int
    employee_name: str
    end_date: date
    employee_deactivated: bool = False
