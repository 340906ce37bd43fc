"""Employment contract domain model."""

from datetime import date
from enum import StrEnum


class ContractStatus(StrEnum):
    """Employment contract status enum."""

    ACTIVE = "active"
    ENDED = "ended"


class EmploymentType(StrEnum):
    """Employment type enum."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


def compute_contract_status(end_date: date | None, today: date) -> ContractStatus:
    """Status a contract gets when it is created."""
    if end_date is not None and end_date < today:
        return ContractStatus.ENDED
    return ContractStatus.ACTIVE
