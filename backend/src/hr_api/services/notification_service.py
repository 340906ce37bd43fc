"""Notification service for real-time HR events."""

import asyncio
import logging
from datetime import date
from typing import Any

from pydantic import BaseModel

from hr_api.models.domain.contract import ContractStatus
from hr_api.models.domain.leave import LeaveRequestStatus
from hr_api.models.dto.contract import EndedContract
from hr_api.models.dto.leave_request import CompletedLeave
from hr_api.models.dto.notification import (
    ContractExpiringPayload,
    ContractUpdatedPayload,
    EmployeeUpdatedPayload,
    HubEvent,
    LeaveRequestUpdatedPayload,
    UpcomingLeavePayload,
)
from hr_api.models.orm.employment_contract import EmploymentContractORM
from hr_api.models.orm.leave_request import LeaveRequestORM
from hr_api.services.notification_hub import NotificationHub
from hr_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# Upper bound for flushing in-flight deliveries on shutdown
DRAIN_TIMEOUT = 5.0


class NotificationService:
    """Fire-and-forget publisher used by the lifecycle services and the monitor.

    ``publish`` schedules delivery on the running event loop and returns
    immediately. Delivery errors are logged and never reach the caller, so a
    failed notification cannot undo the state change that triggered it.
    """

    def __init__(self, hub: NotificationHub) -> None:
        """Initialize service with the hub that delivers events."""
        self.hub = hub
        self._pending: set[asyncio.Task] = set()

    def publish(self, event: str, payload: BaseModel | dict[str, Any]) -> None:
        """Schedule an event for delivery to all hub clients.

        Args:
            event: Event name
            payload: Event payload, a pydantic model or a JSON-ready dict
        """
        try:
            data = payload.model_dump(mode="json") if isinstance(payload, BaseModel) else payload
            task = asyncio.get_running_loop().create_task(self._deliver(event, data))
        except Exception as e:
            log_error(logger, f"Failed to schedule {event} notification", e)
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, event: str, data: dict[str, Any]) -> None:
        try:
            delivered = await self.hub.broadcast(event, data)
        except Exception as e:
            log_error(logger, f"Failed to publish {event} notification", e)
            return
        logger.info(f"Published {event} notification to {delivered} client(s)")

    async def drain(self, timeout: float = DRAIN_TIMEOUT) -> None:
        """Wait for scheduled deliveries to finish.

        Args:
            timeout: Seconds to wait before giving up on slow deliveries
        """
        if not self._pending:
            return
        done, pending = await asyncio.wait(set(self._pending), timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(f"Cancelled {len(pending)} undelivered notification(s)")

    # =========================================================================
    # Contract events
    # =========================================================================

    def notify_contract_updated(
        self,
        contract_id: int,
        employee_id: int,
        employee_name: str,
        status: ContractStatus,
        end_date: date | None = None,
        message: str | None = None,
    ) -> None:
        """Publish a ContractUpdated event for a contract that became active or ended."""
        self.publish(
            HubEvent.CONTRACT_UPDATED,
            ContractUpdatedPayload(
                contract_id=contract_id,
                employee_id=employee_id,
                employee_name=employee_name,
                status=status.title(),
                end_date=end_date,
                message=message or f"Contract status changed to {status.title()}",
            ),
        )

    def notify_contract_ended(self, ended: EndedContract) -> None:
        """Publish the ContractUpdated event for a contract ended by the expiry sweep."""
        self.notify_contract_updated(
            contract_id=ended.contract_id,
            employee_id=ended.employee_id,
            employee_name=ended.employee_name,
            status=ContractStatus.ENDED,
            end_date=ended.end_date,
            message="Employment contract has ended",
        )

    def notify_contract_expiring(
        self, contract: EmploymentContractORM, days_until_expiry: int
    ) -> None:
        """Publish a ContractExpiringSoon event.

        Args:
            contract: Active contract with its employee loaded
            days_until_expiry: Days from today until the end date
        """
        self.publish(
            HubEvent.CONTRACT_EXPIRING_SOON,
            ContractExpiringPayload(
                contract_id=contract.id,
                employee_id=contract.employee_id,
                employee_name=contract.employee.full_name,
                employee_email=contract.employee.email,
                end_date=contract.end_date,
                days_until_expiry=days_until_expiry,
                employment_type=contract.employment_type,
                base_salary=contract.base_salary,
            ),
        )

    # =========================================================================
    # Leave events
    # =========================================================================

    def notify_leave_request_updated(
        self,
        leave_request: LeaveRequestORM,
        message: str | None = None,
    ) -> None:
        """Publish a LeaveRequestUpdated event with the request's current status.

        Args:
            leave_request: Leave request with its employee loaded
            message: Human-readable message; defaults to the status change
        """
        status = leave_request.status.title()
        self.publish(
            HubEvent.LEAVE_REQUEST_UPDATED,
            LeaveRequestUpdatedPayload(
                leave_request_id=leave_request.id,
                employee_id=leave_request.employee_id,
                employee_name=leave_request.employee.full_name,
                status=status,
                message=message or f"Leave request status changed to {status}",
            ),
        )

    def notify_leave_completed(self, completed: CompletedLeave) -> None:
        """Publish the LeaveRequestUpdated event for a leave completed by the sweep."""
        self.publish(
            HubEvent.LEAVE_REQUEST_UPDATED,
            LeaveRequestUpdatedPayload(
                leave_request_id=completed.leave_request_id,
                employee_id=completed.employee_id,
                employee_name=completed.employee_name,
                status=LeaveRequestStatus.COMPLETED.title(),
                message="Leave request has been completed",
                leave_type=completed.leave_type,
                start_date=completed.start_date,
                end_date=completed.end_date,
            ),
        )

    def notify_upcoming_leave(self, leave_request: LeaveRequestORM, days_until_start: int) -> None:
        """Publish an UpcomingLeave event.

        Args:
            leave_request: Approved leave with its employee loaded
            days_until_start: Days from today until the first day of leave
        """
        self.publish(
            HubEvent.UPCOMING_LEAVE,
            UpcomingLeavePayload(
                leave_request_id=leave_request.id,
                employee_id=leave_request.employee_id,
                employee_name=leave_request.employee.full_name,
                employee_email=leave_request.employee.email,
                leave_type=leave_request.leave_type,
                start_date=leave_request.start_date,
                end_date=leave_request.end_date,
                days_until_start=days_until_start,
                reason=leave_request.reason,
            ),
        )

    # =========================================================================
    # Employee events
    # =========================================================================

    def notify_employee_updated(
        self,
        employee_id: int,
        employee_name: str,
        change_type: str,
        message: str | None = None,
    ) -> None:
        """Publish an EmployeeUpdated event.

        Args:
            employee_id: Employee ID
            employee_name: Employee full name
            change_type: What happened, e.g. ``created`` or ``status_changed``
            message: Human-readable message
        """
        self.publish(
            HubEvent.EMPLOYEE_UPDATED,
            EmployeeUpdatedPayload(
                employee_id=employee_id,
                employee_name=employee_name,
                change_type=change_type,
                message=message or f"Employee {change_type}",
            ),
        )
