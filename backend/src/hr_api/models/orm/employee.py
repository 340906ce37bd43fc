"""Employee ORM model."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.employee import EmployeeStatus
from hr_api.models.orm.base import Base, IntIdMixin, TimestampMixin


class EmployeeORM(Base, IntIdMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=EmployeeStatus.ACTIVE
    )
    department_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
    )
    position_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("positions.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships - load explicitly with selectinload() when needed
    department: Mapped["DepartmentORM | None"] = relationship(
        "DepartmentORM",
        back_populates="employees",
        foreign_keys=[department_id],
        lazy="select",
    )
    position: Mapped["PositionORM | None"] = relationship(
        "PositionORM",
        back_populates="employees",
        lazy="select",
    )

    # Rows are removed by ON DELETE CASCADE, the ORM never loads them for deletion
    contracts: Mapped[list["EmploymentContractORM"]] = relationship(
        "EmploymentContractORM",
        back_populates="employee",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    leave_requests: Mapped[list["LeaveRequestORM"]] = relationship(
        "LeaveRequestORM",
        back_populates="employee",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_employees_status", "status"),
        Index("idx_employees_department_id", "department_id"),
        Index("idx_employees_position_id", "position_id"),
    )


# Import here to avoid circular import
from hr_api.models.orm.department import DepartmentORM  # noqa: E402, F401
from hr_api.models.orm.employment_contract import EmploymentContractORM  # noqa: E402, F401
from hr_api.models.orm.leave_request import LeaveRequestORM  # noqa: E402, F401
from hr_api.models.orm.position import PositionORM  # noqa: E402, F401
