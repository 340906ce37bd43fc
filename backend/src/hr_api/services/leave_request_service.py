"""Leave request lifecycle service.

Leave requests move through a small state machine::

    draft -> submitted -> approved -> completed
                       -> rejected
                       -> cancelled

Drafts may be edited. Approval, rejection and cancellation are only possible
from ``submitted``. Completion is applied by the monitoring sweep once the
last day of an approved leave has passed.
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hr_api.database import commit_or_raise
from hr_api.exceptions import (
    EmployeeNotFoundError,
    InvalidDateRangeError,
    InvalidTransitionError,
    LeaveRequestNotFoundError,
    NoValidContractError,
    OverlappingLeaveError,
)
from hr_api.models.domain.leave import LeaveRequestStatus, is_within_contract
from hr_api.models.dto.leave_request import (
    CompletedLeave,
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveRequestUpdate,
)
from hr_api.models.orm.leave_request import LeaveRequestORM
from hr_api.repositories.contract_repository import ContractRepository
from hr_api.repositories.employee_repository import EmployeeRepository
from hr_api.repositories.leave_request_repository import LeaveRequestRepository
from hr_api.services.notification_service import NotificationService
from hr_api.utils.dates import utc_today

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Service for the leave request workflow."""

    def __init__(self, session: AsyncSession, notifications: NotificationService) -> None:
        """Initialize service with database session and publisher."""
        self.session = session
        self.notifications = notifications
        self.leave_repo = LeaveRequestRepository(session)
        self.contract_repo = ContractRepository(session)
        self.employee_repo = EmployeeRepository(session)

    # =========================================================================
    # Drafts
    # =========================================================================

    async def create_draft(self, data: LeaveRequestCreate) -> LeaveRequestResponse:
        """Create a leave request in draft status.

        Args:
            data: Leave request data

        Returns:
            Created leave request

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            InvalidDateRangeError: If the end date is before the start date
            NoValidContractError: If no active contract covers the dates
        """
        employee = await self.employee_repo.get(data.employee_id)
        if employee is None:
            raise EmployeeNotFoundError(data.employee_id)

        await self._validate_dates(employee.id, data.start_date, data.end_date)

        leave_request = await self.leave_repo.create(
            employee=employee,
            leave_type=data.leave_type,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=data.reason,
            status=LeaveRequestStatus.DRAFT,
        )
        await commit_or_raise(self.session)
        logger.info(f"Created leave request draft {leave_request.id} for employee {employee.id}")
        return self._to_response(leave_request)

    async def update_draft(
        self, leave_request_id: int, data: LeaveRequestUpdate
    ) -> LeaveRequestResponse:
        """Update a draft. Omitted fields keep their value.

        The merged dates are validated again.

        Args:
            leave_request_id: Leave request ID
            data: Fields to change

        Returns:
            Updated leave request

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
            InvalidTransitionError: If the leave request is not a draft
            InvalidDateRangeError: If the merged end date is before the start date
            NoValidContractError: If no active contract covers the merged dates
        """
        leave_request = await self._lock_or_raise(leave_request_id)
        self._require_status(leave_request, LeaveRequestStatus.DRAFT, "edited")

        changes = data.model_dump(exclude_none=True)
        start_date = changes.get("start_date", leave_request.start_date)
        end_date = changes.get("end_date", leave_request.end_date)
        await self._validate_dates(leave_request.employee_id, start_date, end_date)

        await self.leave_repo.update(leave_request, **changes)
        await commit_or_raise(self.session)
        logger.info(f"Updated leave request draft {leave_request.id}")
        return self._to_response(leave_request)

    # =========================================================================
    # Transitions
    # =========================================================================

    async def submit(self, leave_request_id: int) -> LeaveRequestResponse:
        """Submit a draft for approval.

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
            InvalidTransitionError: If the leave request is not a draft
        """
        leave_request = await self._lock_or_raise(leave_request_id)
        self._require_status(leave_request, LeaveRequestStatus.DRAFT, "submitted")

        leave_request.status = LeaveRequestStatus.SUBMITTED
        await commit_or_raise(self.session)
        logger.info(f"Submitted leave request {leave_request.id}")
        return self._to_response(leave_request)

    async def approve(self, leave_request_id: int, approver_name: str) -> LeaveRequestResponse:
        """Approve a submitted leave request.

        Args:
            leave_request_id: Leave request ID
            approver_name: Name recorded as approver

        Returns:
            Approved leave request

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
            InvalidTransitionError: If the leave request is not submitted
            OverlappingLeaveError: If another approved leave shares a day with it
        """
        # Lock order: employee row, then leave row
        leave_request = await self._get_or_raise(leave_request_id)
        await self.employee_repo.get_for_update(leave_request.employee_id)
        leave_request = await self._lock_or_raise(leave_request_id)
        self._require_status(leave_request, LeaveRequestStatus.SUBMITTED, "approved")

        if await self.leave_repo.has_overlapping_approved(
            leave_request.employee_id,
            leave_request.start_date,
            leave_request.end_date,
            exclude_id=leave_request.id,
        ):
            raise OverlappingLeaveError(leave_request.id, leave_request.employee_id)

        leave_request.status = LeaveRequestStatus.APPROVED
        leave_request.approver_name = approver_name
        await commit_or_raise(self.session)
        logger.info(f"Approved leave request {leave_request.id}")

        self.notifications.notify_leave_request_updated(
            leave_request, f"Leave request approved by {approver_name}"
        )
        return self._to_response(leave_request)

    async def reject(self, leave_request_id: int, approver_name: str) -> LeaveRequestResponse:
        """Reject a submitted leave request.

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
            InvalidTransitionError: If the leave request is not submitted
        """
        leave_request = await self._lock_or_raise(leave_request_id)
        self._require_status(leave_request, LeaveRequestStatus.SUBMITTED, "rejected")

        leave_request.status = LeaveRequestStatus.REJECTED
        leave_request.approver_name = approver_name
        await commit_or_raise(self.session)
        logger.info(f"Rejected leave request {leave_request.id}")

        self.notifications.notify_leave_request_updated(
            leave_request, f"Leave request rejected by {approver_name}"
        )
        return self._to_response(leave_request)

    async def cancel(self, leave_request_id: int) -> LeaveRequestResponse:
        """Cancel a submitted leave request.

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
            InvalidTransitionError: If the leave request is not submitted
        """
        leave_request = await self._lock_or_raise(leave_request_id)
        self._require_status(leave_request, LeaveRequestStatus.SUBMITTED, "cancelled")

        leave_request.status = LeaveRequestStatus.CANCELLED
        await commit_or_raise(self.session)
        logger.info(f"Cancelled leave request {leave_request.id}")

        self.notifications.notify_leave_request_updated(
            leave_request, "Leave request has been cancelled"
        )
        return self._to_response(leave_request)

    async def complete_expired_leaves(self, today: date | None = None) -> list[CompletedLeave]:
        """Complete every approved leave whose last day has passed.

        The batch is committed at once and notifications are sent after it.

        Args:
            today: Reference date, defaults to the current UTC date

        Returns:
            Leave requests completed by this call
        """
        today = today or utc_today()

        expired = await self.leave_repo.get_expired_approved(today)
        if not expired:
            logger.debug("No approved leave requests to complete")
            return []

        for leave_request in expired:
            leave_request.status = LeaveRequestStatus.COMPLETED
        await commit_or_raise(self.session)

        completed = [
            CompletedLeave(
                leave_request_id=lr.id,
                employee_id=lr.employee_id,
                employee_name=lr.employee.full_name,
                leave_type=lr.leave_type,
                start_date=lr.start_date,
                end_date=lr.end_date,
            )
            for lr in expired
        ]
        logger.info(f"Completed {len(completed)} leave request(s)")

        for item in completed:
            self.notifications.notify_leave_completed(item)

        return completed

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_leave_request(self, leave_request_id: int) -> LeaveRequestResponse:
        """Get a leave request by ID.

        Raises:
            LeaveRequestNotFoundError: If the leave request does not exist
        """
        return self._to_response(await self._get_or_raise(leave_request_id))

    async def list_for_employee(self, employee_id: int) -> list[LeaveRequestResponse]:
        """Get all leave requests of an employee, latest start first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if not await self.employee_repo.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)
        leave_requests = await self.leave_repo.get_by_employee(employee_id)
        return [self._to_response(lr) for lr in leave_requests]

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _get_or_raise(self, leave_request_id: int) -> LeaveRequestORM:
        leave_request = await self.leave_repo.get_with_employee(leave_request_id)
        if leave_request is None:
            raise LeaveRequestNotFoundError(leave_request_id)
        return leave_request

    async def _lock_or_raise(self, leave_request_id: int) -> LeaveRequestORM:
        leave_request = await self.leave_repo.get_with_employee_for_update(leave_request_id)
        if leave_request is None:
            raise LeaveRequestNotFoundError(leave_request_id)
        return leave_request

    @staticmethod
    def _require_status(
        leave_request: LeaveRequestORM, required: LeaveRequestStatus, action: str
    ) -> None:
        if leave_request.status != required:
            raise InvalidTransitionError(
                action=action,
                required_status=required.title(),
                current_status=leave_request.status,
            )

    async def _validate_dates(self, employee_id: int, start_date: date, end_date: date) -> None:
        """Check the range and that one active contract covers all of it."""
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)

        contracts = await self.contract_repo.get_active_by_employee(employee_id)
        if not any(
            is_within_contract(start_date, end_date, c.start_date, c.end_date) for c in contracts
        ):
            raise NoValidContractError(employee_id, start_date, end_date)

    @staticmethod
    def _to_response(leave_request: LeaveRequestORM) -> LeaveRequestResponse:
        return LeaveRequestResponse(
            id=leave_request.id,
            employee_id=leave_request.employee_id,
            employee_name=leave_request.employee.full_name if leave_request.employee else "",
            leave_type=leave_request.leave_type,
            start_date=leave_request.start_date,
            end_date=leave_request.end_date,
            reason=leave_request.reason,
            status=leave_request.status,
            approver_name=leave_request.approver_name,
        )
