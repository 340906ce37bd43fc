"""Background HR monitor using APScheduler."""

import logging
from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.services.monitoring_service import MonitoringService, SweepResult
from hr_api.services.notification_service import NotificationService
from hr_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

MONITOR_JOB_ID = "hr_monitoring_sweep"


class HrMonitor:
    """Recurring task that runs the monitoring sweep on a fixed interval.

    The monitor owns its scheduler and receives the session factory and
    publisher explicitly. Every tick uses a fresh session, and a failing tick
    is logged without affecting the next one.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        notifications: NotificationService,
        interval_minutes: int = 60,
        contract_expiry_window_days: int | None = None,
        leave_notice_window_days: int | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            session_factory: Callable returning a new ``AsyncSession``
            notifications: Publisher for sweep events
            interval_minutes: Minutes between sweeps
            contract_expiry_window_days: Override for the contract look-ahead window
            leave_notice_window_days: Override for the leave look-ahead window
        """
        self.session_factory = session_factory
        self.notifications = notifications
        self.interval_minutes = interval_minutes
        self.contract_expiry_window_days = contract_expiry_window_days
        self.leave_notice_window_days = leave_notice_window_days
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def running(self) -> bool:
        """Whether the scheduler is started."""
        return self._scheduler is not None and self._scheduler.running

    async def run_once(self) -> SweepResult | None:
        """Run a single sweep on a fresh session.

        Returns:
            The sweep result, or None if the sweep failed
        """
        logger.info("Starting HR monitoring sweep")
        try:
            async with self.session_factory() as session:
                service = MonitoringService(
                    session,
                    self.notifications,
                    contract_expiry_window_days=self.contract_expiry_window_days,
                    leave_notice_window_days=self.leave_notice_window_days,
                )
                return await service.run_sweep()
        except Exception as e:
            # Closing the session rolls back whatever the failed step left pending
            log_error(logger, "HR monitoring sweep failed", e)
            return None

    def start(self) -> None:
        """Start the scheduler. The first sweep runs immediately."""
        if self.running:
            logger.warning("HR monitor already running")
            return

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.run_once,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=MONITOR_JOB_ID,
            name="HR monitoring sweep",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now(),  # Run immediately on startup
        )
        self._scheduler.start()
        logger.info(f"HR monitor started (every {self.interval_minutes} minute(s))")

    def stop(self) -> None:
        """Stop the scheduler without waiting, dropping the pending wait."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("HR monitor stopped")
