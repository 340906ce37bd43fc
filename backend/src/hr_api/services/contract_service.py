"""Employment contract lifecycle service."""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import commit_or_raise
from hr_api.exceptions import (
    ContractNotFoundError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    OverlappingContractError,
)
from hr_api.models.domain.contract import ContractStatus, compute_contract_status
from hr_api.models.domain.employee import EmployeeStatus
from hr_api.models.dto.contract import ContractCreate, ContractResponse, EndedContract
from hr_api.models.orm.employment_contract import EmploymentContractORM
from hr_api.repositories.contract_repository import ContractRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.services.notification_service import NotificationService
from hr_api.utils.dates import utc_today

logger = logging.getLogger(__name__)


class ContractService:
    """Service for creating employment contracts and ending expired ones."""

    def __init__(self, session: AsyncSession, notifications: NotificationService) -> None:
        """Initialize service with database session and publisher."""
        self.session = session
        self.notifications = notifications
        self.contract_repo = ContractRepository(session)
        self.employee_repo = EmployeeRepository(session)

    async def create_contract(
        self, data: ContractCreate, today: date | None = None
    ) -> ContractResponse:
        """Create an employment contract.

        A contract whose end date already lies in the past is stored as
        ended. An active contract that has already started makes the
        employee active.

        Args:
            data: Contract data
            today: Reference date, defaults to the current UTC date

        Returns:
            Created contract

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            InvalidDateRangeError: If the end date is before the start date
            OverlappingContractError: If an active contract of the employee overlaps
            PersistenceError: If the commit is rejected
        """
        today = today or utc_today()

        # Row lock serializes concurrent contract creation for one employee
        employee = await self.employee_repo.get_for_update(data.employee_id)
        if employee is None:
            raise EmployeeNotFoundError(data.employee_id)

        if data.end_date is not None and data.end_date < data.start_date:
            raise InvalidDateRangeError(data.start_date, data.end_date)

        if await self.contract_repo.has_overlapping_active(
            employee.id, data.start_date, data.end_date
        ):
            raise OverlappingContractError(employee.id, data.start_date, data.end_date)

        status = compute_contract_status(data.end_date, today)
        contract = await self.contract_repo.create(
            employee=employee,
            start_date=data.start_date,
            end_date=data.end_date,
            employment_type=data.employment_type,
            base_salary=data.base_salary,
            status=status,
        )

        if status == ContractStatus.ACTIVE and data.start_date <= today:
            employee.status = EmployeeStatus.ACTIVE

        await commit_or_raise(self.session)
        logger.info(f"Created {status} contract {contract.id} for employee {employee.id}")

        if status == ContractStatus.ACTIVE:
            self.notifications.notify_contract_updated(
                contract_id=contract.id,
                employee_id=employee.id,
                employee_name=employee.full_name,
                status=ContractStatus.ACTIVE,
                end_date=contract.end_date,
                message="New employment contract created and is now active",
            )

        return self._to_response(contract)

    async def get_contract(self, contract_id: int) -> ContractResponse:
        """Get a contract by ID.

        Raises:
            ContractNotFoundError: If the contract does not exist
        """
        contract = await self.contract_repo.get_with_employee(contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        return self._to_response(contract)

    async def get_active_contracts_for_employee(self, employee_id: int) -> list[ContractResponse]:
        """Get an employee's active contracts, latest start first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if not await self.employee_repo.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)
        contracts = await self.contract_repo.get_active_by_employee(employee_id)
        return [self._to_response(c) for c in contracts]

    async def end_expired_contracts(self, today: date | None = None) -> list[EndedContract]:
        """End every active contract whose end date has passed.

        Employees left without an active contract become inactive. The whole
        batch is committed at once, so a rejected commit ends nothing.
        Notifications are sent only after the commit.

        Args:
            today: Reference date, defaults to the current UTC date

        Returns:
            Contracts ended by this call; empty when nothing had expired
        """
        today = today or utc_today()

        expired = await self.contract_repo.get_expired_active(today)
        if not expired:
            logger.debug("No expired contracts to end")
            return []

        for contract in expired:
            contract.status = ContractStatus.ENDED
        await self.session.flush()

        # Checked after the flush so contracts ending in the same batch are not counted
        employees = {c.employee_id: c.employee for c in expired}
        deactivated: set[int] = set()
        for employee_id, employee in employees.items():
            if not await self.contract_repo.has_any_active(employee_id):
                employee.status = EmployeeStatus.INACTIVE
                deactivated.add(employee_id)

        await commit_or_raise(self.session)

        ended = [
            EndedContract(
                contract_id=c.id,
                employee_id=c.employee_id,
                employee_name=c.employee.full_name,
                end_date=c.end_date,
                employee_deactivated=c.employee_id in deactivated,
            )
            for c in expired
        ]
        logger.info(
            f"Ended {len(ended)} expired contract(s), {len(deactivated)} employee(s) now inactive"
        )

        for item in ended:
            self.notifications.notify_contract_ended(item)

        return ended

    @staticmethod
    def _to_response(contract: EmploymentContractORM) -> ContractResponse:
        return ContractResponse(
            id=contract.id,
            employee_id=contract.employee_id,
            employee_name=contract.employee.full_name if contract.employee else "",
            start_date=contract.start_date,
            end_date=contract.end_date,
            employment_type=contract.employment_type,
            base_salary=contract.base_salary,
            status=contract.status,
        )
