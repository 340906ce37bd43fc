"""API routers package."""

from hr_api.routers import (
    contracts,
    departments,
    employees,
    leave_requests,
    notifications,
    positions,
)

__all__ = [
    "contracts",
    "departments",
    "employees",
    "leave_requests",
    "notifications",
    "positions",
]
