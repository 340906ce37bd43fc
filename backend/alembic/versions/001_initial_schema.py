"""Initial schema

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Needed for "=" on integer columns inside GiST exclusion constraints
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    # Create departments table (manager key added once employees exists)
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("manager_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_departments_name", "departments", ["name"])
    op.create_index("idx_departments_manager_id", "departments", ["manager_id"])

    # Create positions table
    op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_positions_department_title", "positions", ["department_id", "title"])

    # Create employees table
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("position_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["position_id"], ["positions.id"], ondelete="SET NULL"),
    )
    op.create_index("idx_employees_status", "employees", ["status"])
    op.create_index("idx_employees_department_id", "employees", ["department_id"])
    op.create_index("idx_employees_position_id", "employees", ["position_id"])

    op.create_foreign_key(
        "fk_departments_manager_id",
        "departments",
        "employees",
        ["manager_id"],
        ["id"],
        ondelete="RESTRICT",
    )

    # Create employment_contracts table
    op.create_table(
        "employment_contracts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("employment_type", sa.String(50), nullable=False),
        sa.Column("base_salary", sa.Numeric(18, 2), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="active"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.CheckConstraint("base_salary >= 0", name="ck_contracts_base_salary_non_negative"),
        sa.CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_contracts_date_range",
        ),
    )
    op.create_index(
        "idx_contracts_employee_status", "employment_contracts", ["employee_id", "status"]
    )
    op.create_index("idx_contracts_end_date", "employment_contracts", ["end_date"])
    # Active contracts of one employee never overlap; end_date is exclusive, NULL is open-ended
    op.execute(
        """
        ALTER TABLE employment_contracts
        ADD CONSTRAINT ex_contracts_no_active_overlap
        EXCLUDE USING gist (
            employee_id WITH =,
            daterange(start_date, end_date, '[)') WITH &&
        ) WHERE (status = 'active')
        """
    )

    # Create leave_requests table
    op.create_table(
        "leave_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("leave_type", sa.String(50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="draft"),
        sa.Column("approver_name", sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.CheckConstraint("end_date >= start_date", name="ck_leave_requests_date_range"),
    )
    op.create_index(
        "idx_leave_requests_employee_status", "leave_requests", ["employee_id", "status"]
    )
    op.create_index("idx_leave_requests_start_date", "leave_requests", ["start_date"])
    # Approved leaves of one employee never overlap; both ends inclusive
    op.execute(
        """
        ALTER TABLE leave_requests
        ADD CONSTRAINT ex_leave_requests_no_approved_overlap
        EXCLUDE USING gist (
            employee_id WITH =,
            daterange(start_date, end_date, '[]') WITH &&
        ) WHERE (status = 'approved')
        """
    )


def downgrade() -> None:
    op.drop_index("idx_leave_requests_start_date", table_name="leave_requests")
    op.drop_index("idx_leave_requests_employee_status", table_name="leave_requests")
    op.drop_table("leave_requests")
    op.drop_index("idx_contracts_end_date", table_name="employment_contracts")
    op.drop_index("idx_contracts_employee_status", table_name="employment_contracts")
    op.drop_table("employment_contracts")
    op.drop_constraint("fk_departments_manager_id", "departments", type_="foreignkey")
    op.drop_index("idx_employees_position_id", table_name="employees")
    op.drop_index("idx_employees_department_id", table_name="employees")
    op.drop_index("idx_employees_status", table_name="employees")
    op.drop_table("employees")
    op.drop_index("idx_positions_department_title", table_name="positions")
    op.drop_table("positions")
    op.drop_index("idx_departments_manager_id", table_name="departments")
    op.drop_index("idx_departments_name", table_name="departments")
    op.drop_table("departments")
