"""Employee domain model."""

from enum import StrEnum


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    INACTIVE = "inactive"
