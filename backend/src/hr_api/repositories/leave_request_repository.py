"""Leave request repository."""

from datetime import date

from sqlalchemy import and_, exists, select
from sqlalchemy.orm import selectinload

from hr_api.models.domain.leave import LeaveRequestStatus
from hr_api.models.orm.leave_request import LeaveRequestORM
from hr_api.repositories.base import BaseRepository


class LeaveRequestRepository(BaseRepository[LeaveRequestORM]):
    """Repository for leave request operations."""

    model = LeaveRequestORM

    async def get_with_employee(self, leave_request_id: int) -> LeaveRequestORM | None:
        """Get a leave request with its employee loaded.

        Args:
            leave_request_id: Leave request ID

        Returns:
            LeaveRequestORM or None if not found
        """
        result = await self.session.execute(
            select(LeaveRequestORM)
            .where(LeaveRequestORM.id == leave_request_id)
            .options(selectinload(LeaveRequestORM.employee))
        )
        return result.scalar_one_or_none()

    async def get_with_employee_for_update(self, leave_request_id: int) -> LeaveRequestORM | None:
        """Get a leave request with its employee and lock its row.

        Values already held by the session are overwritten with the locked
        row, so status guards see the latest committed state.

        Args:
            leave_request_id: Leave request ID

        Returns:
            LeaveRequestORM or None if not found
        """
        result = await self.session.execute(
            select(LeaveRequestORM)
            .where(LeaveRequestORM.id == leave_request_id)
            .options(selectinload(LeaveRequestORM.employee))
            .with_for_update(of=LeaveRequestORM)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_employee(self, employee_id: int) -> list[LeaveRequestORM]:
        """Get all leave requests of an employee, latest start first.

        Args:
            employee_id: Employee ID

        Returns:
            List of leave requests
        """
        result = await self.session.execute(
            select(LeaveRequestORM)
            .where(LeaveRequestORM.employee_id == employee_id)
            .options(selectinload(LeaveRequestORM.employee))
            .order_by(LeaveRequestORM.start_date.desc(), LeaveRequestORM.id.desc())
        )
        return list(result.scalars().all())

    async def has_overlapping_approved(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        exclude_id: int | None = None,
    ) -> bool:
        """Check for an approved leave intersecting ``[start_date, end_date]``.

        Both bounds are inclusive, so leaves sharing a single day overlap.

        Args:
            employee_id: Employee ID
            start_date: First day of the candidate leave
            end_date: Last day of the candidate leave
            exclude_id: Leave request ID to ignore (the one being approved)

        Returns:
            True if an overlapping approved leave exists
        """
        conditions = [
            LeaveRequestORM.employee_id == employee_id,
            LeaveRequestORM.status == LeaveRequestStatus.APPROVED,
            LeaveRequestORM.start_date <= end_date,
            LeaveRequestORM.end_date >= start_date,
        ]
        if exclude_id is not None:
            conditions.append(LeaveRequestORM.id != exclude_id)

        result = await self.session.execute(select(exists().where(and_(*conditions))))
        return bool(result.scalar())

    async def get_expired_approved(self, today: date) -> list[LeaveRequestORM]:
        """Get approved leaves whose last day is before today.

        Args:
            today: Reference date

        Returns:
            List of leave requests with employees loaded
        """
        result = await self.session.execute(
            select(LeaveRequestORM)
            .where(
                LeaveRequestORM.status == LeaveRequestStatus.APPROVED,
                LeaveRequestORM.end_date < today,
            )
            .options(selectinload(LeaveRequestORM.employee))
            .order_by(LeaveRequestORM.end_date, LeaveRequestORM.id)
        )
        return list(result.scalars().all())

    async def get_approved_starting_between(
        self, from_date: date, to_date: date
    ) -> list[LeaveRequestORM]:
        """Get approved leaves starting within ``[from_date, to_date]``.

        Args:
            from_date: First day of the window
            to_date: Last day of the window (inclusive)

        Returns:
            List of leave requests with employees loaded, soonest start first
        """
        result = await self.session.execute(
            select(LeaveRequestORM)
            .where(
                LeaveRequestORM.status == LeaveRequestStatus.APPROVED,
                LeaveRequestORM.start_date >= from_date,
                LeaveRequestORM.start_date <= to_date,
            )
            .options(selectinload(LeaveRequestORM.employee))
            .order_by(LeaveRequestORM.start_date, LeaveRequestORM.id)
        )
        return list(result.scalars().all())
