"""Employment contract repository."""

from datetime import date

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.orm import selectinload

from hr_api.models.domain.contract import ContractStatus
from hr_api.models.orm.employment_contract import EmploymentContractORM
from hr_api.repositories.base import BaseRepository


class ContractRepository(BaseRepository[EmploymentContractORM]):
    """Repository for employment contract operations."""

    model = EmploymentContractORM

    async def get_with_employee(self, contract_id: int) -> EmploymentContractORM | None:
        """Get a contract with its employee loaded.

        Args:
            contract_id: Contract ID

        Returns:
            EmploymentContractORM or None if not found
        """
        result = await self.session.execute(
            select(EmploymentContractORM)
            .where(EmploymentContractORM.id == contract_id)
            .options(selectinload(EmploymentContractORM.employee))
        )
        return result.scalar_one_or_none()

    async def get_active_by_employee(self, employee_id: int) -> list[EmploymentContractORM]:
        """Get active contracts of an employee, latest start first.

        Args:
            employee_id: Employee ID

        Returns:
            List of active contracts
        """
        result = await self.session.execute(
            select(EmploymentContractORM)
            .where(
                EmploymentContractORM.employee_id == employee_id,
                EmploymentContractORM.status == ContractStatus.ACTIVE,
            )
            .options(selectinload(EmploymentContractORM.employee))
            .order_by(EmploymentContractORM.start_date.desc())
        )
        return list(result.scalars().all())

    async def has_overlapping_active(
        self,
        employee_id: int,
        start_date: date,
        end_date: date | None,
        exclude_id: int | None = None,
    ) -> bool:
        """Check for an active contract intersecting ``[start_date, end_date)``.

        Ranges are half-open and a missing end date is unbounded, so a
        contract ending on the day another starts does not overlap it.

        Args:
            employee_id: Employee ID
            start_date: Start of the candidate span
            end_date: Exclusive end of the candidate span, or None
            exclude_id: Contract ID to ignore (the one being edited)

        Returns:
            True if an overlapping active contract exists
        """
        conditions = [
            EmploymentContractORM.employee_id == employee_id,
            EmploymentContractORM.status == ContractStatus.ACTIVE,
            or_(
                EmploymentContractORM.end_date.is_(None),
                EmploymentContractORM.end_date > start_date,
            ),
        ]
        if end_date is not None:
            conditions.append(EmploymentContractORM.start_date < end_date)
        if exclude_id is not None:
            conditions.append(EmploymentContractORM.id != exclude_id)

        result = await self.session.execute(select(exists().where(and_(*conditions))))
        return bool(result.scalar())

    async def has_any_active(self, employee_id: int) -> bool:
        """Check whether an employee still holds any active contract."""
        result = await self.session.execute(
            select(
                exists().where(
                    EmploymentContractORM.employee_id == employee_id,
                    EmploymentContractORM.status == ContractStatus.ACTIVE,
                )
            )
        )
        return bool(result.scalar())

    async def get_expired_active(self, today: date) -> list[EmploymentContractORM]:
        """Get active contracts whose end date is before today.

        Args:
            today: Reference date

        Returns:
            List of contracts with employees loaded
        """
        result = await self.session.execute(
            select(EmploymentContractORM)
            .where(
                EmploymentContractORM.status == ContractStatus.ACTIVE,
                EmploymentContractORM.end_date.is_not(None),
                EmploymentContractORM.end_date < today,
            )
            .options(selectinload(EmploymentContractORM.employee))
            .order_by(EmploymentContractORM.end_date, EmploymentContractORM.id)
        )
        return list(result.scalars().all())

    async def get_expiring_between(
        self, from_date: date, to_date: date
    ) -> list[EmploymentContractORM]:
        """Get active contracts ending within ``[from_date, to_date]``.

        Args:
            from_date: First day of the window
            to_date: Last day of the window (inclusive)

        Returns:
            List of contracts with employees loaded, soonest end first
        """
        result = await self.session.execute(
            select(EmploymentContractORM)
            .where(
                EmploymentContractORM.status == ContractStatus.ACTIVE,
                EmploymentContractORM.end_date.is_not(None),
                EmploymentContractORM.end_date >= from_date,
                EmploymentContractORM.end_date <= to_date,
            )
            .options(selectinload(EmploymentContractORM.employee))
            .order_by(EmploymentContractORM.end_date, EmploymentContractORM.id)
        )
        return list(result.scalars().all())
