"""Domain models package."""

from hr_api.models.domain.contract import (
    ContractStatus,
    EmploymentType,
    compute_contract_status,
)
from hr_api.models.domain.employee import EmployeeStatus
from hr_api.models.domain.leave import (
    LeaveRequestStatus,
    LeaveType,
    is_within_contract,
)

__all__ = [
    "ContractStatus",
    "EmployeeStatus",
    "EmploymentType",
    "LeaveRequestStatus",
    "LeaveType",
    "compute_contract_status",
    "is_within_contract",
]
