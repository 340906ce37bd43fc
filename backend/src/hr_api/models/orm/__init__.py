"""SQLAlchemy ORM models package."""

from hr_api.models.orm.base import Base
from hr_api.models.orm.department import DepartmentORM
from hr_api.models.orm.employee import EmployeeORM
from hr_api.models.orm.employment_contract import EmploymentContractORM
from hr_api.models.orm.leave_request import LeaveRequestORM
from hr_api.models.orm.position import PositionORM

__all__ = [
    "Base",
    "DepartmentORM",
    "EmployeeORM",
    "EmploymentContractORM",
    "LeaveRequestORM",
    "PositionORM",
]
