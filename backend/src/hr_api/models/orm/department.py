"""Department ORM model."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_api.models.orm.base import Base, IntIdMixin, TimestampMixin


class DepartmentORM(Base, IntIdMixin, TimestampMixin):
    """Department database model."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # employees -> departments -> employees is a cycle, so this key is added after both tables
    manager_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "employees.id",
            ondelete="RESTRICT",
            use_alter=True,
            name="fk_departments_manager_id",
        ),
        nullable=True,
    )

    manager: Mapped["EmployeeORM | None"] = relationship(
        "EmployeeORM",
        foreign_keys=[manager_id],
        lazy="select",
        post_update=True,
    )
    employees: Mapped[list["EmployeeORM"]] = relationship(
        "EmployeeORM",
        back_populates="department",
        foreign_keys="[EmployeeORM.department_id]",
        lazy="select",
        passive_deletes=True,
    )
    positions: Mapped[list["PositionORM"]] = relationship(
        "PositionORM",
        back_populates="department",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_departments_name", "name"),
        Index("idx_departments_manager_id", "manager_id"),
    )


# Import here to avoid circular import
from hr_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
from hr_api.models.orm.position import PositionORM  # noqa: E402, F401
