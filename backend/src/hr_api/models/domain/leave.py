"""Leave request domain model."""

from datetime import date
from enum import StrEnum


class LeaveType(StrEnum):
    """Leave type enum."""

    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    UNPAID = "unpaid"


class LeaveRequestStatus(StrEnum):
    """Leave request status enum.

    DRAFT is the initial state. REJECTED, CANCELLED and COMPLETED are terminal.
    """

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


def is_within_contract(
    start_date: date,
    end_date: date,
    contract_start: date,
    contract_end: date | None,
) -> bool:
    """Check whether a leave range lies entirely inside a contract span.

    An open-ended contract has no upper bound.
    """
    if start_date < contract_start:
        return False
    return contract_end is None or end_date <= contract_end
