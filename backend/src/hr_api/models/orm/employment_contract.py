"""Employment contract ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.domain.contract import ContractStatus
from hr_api.models.orm.base import Base, IntIdMixin, TimestampMixin


class EmploymentContractORM(Base, IntIdMixin, TimestampMixin):
    """Employment contract database model.

    The exclusion constraint that forbids overlapping active contracts is
    PostgreSQL specific and lives in the migration only.
    """

    __tablename__ = "employment_contracts"

    employee_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    employment_type: Mapped[str] = mapped_column(String(50), nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ContractStatus.ACTIVE
    )

    employee: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM",
        back_populates="contracts",
        lazy="select",
    )

    __table_args__ = (
        CheckConstraint("base_salary >= 0", name="ck_contracts_base_salary_non_negative"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_contracts_date_range",
        ),
        Index("idx_contracts_employee_status", "employee_id", "status"),
        Index("idx_contracts_end_date", "end_date"),
    )


# Import here to avoid circular import
from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
