"""Monitoring sweep applying time-driven HR transitions and reminders."""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.config import get_settings
from hr_api.models.dto.contract import EndedContract
from hr_api.models.dto.leave_request import CompletedLeave
from hr_api.repositories.contract_repository import ContractRepository
from hr_api.repositories.leave_request_repository import LeaveRequestRepository
from hr_api.services.contract_service import ContractService
from hr_api.services.leave_request_service import LeaveRequestService
from hr_api.services.notification_service import NotificationService
from hr_api.utils.dates import utc_today

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """Outcome of one monitoring sweep."""

    today: date
    ended_contracts: list[EndedContract] = field(default_factory=list)
    completed_leaves: list[CompletedLeave] = field(default_factory=list)
    expiring_contracts_notified: int = 0
    upcoming_leaves_notified: int = 0


class MonitoringService:
    """Runs one pass of the recurring HR monitor.

    A sweep does, in order:

    1. end active contracts whose end date has passed
    2. complete approved leaves whose last day has passed
    3. announce active contracts ending within the expiry window
    4. announce approved leaves starting within the notice window

    Steps 1 and 2 commit separately. Steps 3 and 4 only read and are not
    deduplicated, so an entity inside a window is announced on every sweep.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifications: NotificationService,
        contract_expiry_window_days: int | None = None,
        leave_notice_window_days: int | None = None,
    ) -> None:
        """Initialize service with database session, publisher and look-ahead windows."""
        settings = get_settings()
        self.session = session
        self.notifications = notifications
        self.contract_service = ContractService(session, notifications)
        self.leave_service = LeaveRequestService(session, notifications)
        self.contract_repo = ContractRepository(session)
        self.leave_repo = LeaveRequestRepository(session)
        self.contract_expiry_window_days = (
            contract_expiry_window_days
            if contract_expiry_window_days is not None
            else settings.contract_expiry_window_days
        )
        self.leave_notice_window_days = (
            leave_notice_window_days
            if leave_notice_window_days is not None
            else settings.leave_notice_window_days
        )

    async def run_sweep(self, today: date | None = None) -> SweepResult:
        """Run all four monitoring steps.

        Args:
            today: Reference date, defaults to the current UTC date

        Returns:
            What the sweep changed and announced
        """
        today = today or utc_today()
        result = SweepResult(today=today)

        result.ended_contracts = await self.contract_service.end_expired_contracts(today)
        result.completed_leaves = await self.leave_service.complete_expired_leaves(today)
        result.expiring_contracts_notified = await self.notify_expiring_contracts(today)
        result.upcoming_leaves_notified = await self.notify_upcoming_leaves(today)

        logger.info(
            f"HR monitoring sweep for {today}: "
            f"{len(result.ended_contracts)} contract(s) ended, "
            f"{len(result.completed_leaves)} leave(s) completed, "
            f"{result.expiring_contracts_notified} expiry reminder(s), "
            f"{result.upcoming_leaves_notified} upcoming leave reminder(s)"
        )
        return result

    async def notify_expiring_contracts(self, today: date) -> int:
        """Announce active contracts ending within the expiry window.

        Args:
            today: Reference date

        Returns:
            Number of notifications published
        """
        window_end = today + timedelta(days=self.contract_expiry_window_days)
        contracts = await self.contract_repo.get_expiring_between(today, window_end)
        for contract in contracts:
            self.notifications.notify_contract_expiring(
                contract, days_until_expiry=(contract.end_date - today).days
            )
        return len(contracts)

    async def notify_upcoming_leaves(self, today: date) -> int:
        """Announce approved leaves starting within the notice window.

        Args:
            today: Reference date

        Returns:
            Number of notifications published
        """
        window_end = today + timedelta(days=self.leave_notice_window_days)
        leave_requests = await self.leave_repo.get_approved_starting_between(today, window_end)
        for leave_request in leave_requests:
            self.notifications.notify_upcoming_leave(
                leave_request, days_until_start=(leave_request.start_date - today).days
            )
        return len(leave_requests)
