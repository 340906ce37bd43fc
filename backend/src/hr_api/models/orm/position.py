"""Position ORM model."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.orm.base import Base, IntIdMixin, TimestampMixin


class PositionORM(Base, IntIdMixin, TimestampMixin):
    """Position (job title within a department) database model."""

    __tablename__ = "positions"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    department_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )

    department: Mapped["DepartmentORM"] = relationship(
        "DepartmentORM",
        back_populates="positions",
        lazy="select",
    )
    employees: Mapped[list["EmployeeORM"]] = relationship(
        "EmployeeORM",
        back_populates="position",
        lazy="select",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_positions_department_title", "department_id", "title"),)


# Import here to avoid circular import
from hr_api.models.orm.department import DepartmentORM  # noqa: E402, F401
from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
