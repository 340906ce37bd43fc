"""Leave request ORM model."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.leave import LeaveRequestStatus
from hr_api.models.orm.base import Base, IntIdMixin, TimestampMixin


class LeaveRequestORM(Base, IntIdMixin, TimestampMixin):
    """Leave request database model."""

    __tablename__ = "leave_requests"

    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=LeaveRequestStatus.DRAFT
    )
    approver_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    employee: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM",
        back_populates="leave_requests",
        lazy="select",
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_leave_requests_date_range"),
        Index("idx_leave_requests_employee_status", "employee_id", "status"),
        Index("idx_leave_requests_start_date", "start_date"),
    )


# Import here to avoid circular import
from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
