"""Tests for the leave request workflow."""

from datetime import date

import pytest

from hr_api.exceptions import (
    EmployeeNotFoundError,
    InvalidDateRangeError,
    InvalidTransitionError,
    LeaveRequestNotFoundError,
    NoValidContractError,
    OverlappingLeaveError,
)
from hr_api.models.domain.contract import ContractStatus
from hr_api.models.domain.leave import LeaveRequestStatus, LeaveType
from hr_api.models.dto.leave_request import LeaveRequestCreate, LeaveRequestUpdate
from hr_api.models.dto.notification import HubEvent
from hr_api.models.orm import LeaveRequestORM
from hr_api.services.leave_request_service import LeaveRequestService


def leave_data(employee_id: int, start: date, end: date) -> LeaveRequestCreate:
    return LeaveRequestCreate(
        employee_id=employee_id,
        leave_type=LeaveType.ANNUAL,
        start_date=start,
        end_date=end,
        reason="Summer holiday",
    )


async def new_draft(service: LeaveRequestService, employee, start: date, end: date):
    return await service.create_draft(leave_data(employee.id, start, end))


@pytest.fixture
async def employee(make_employee, make_contract):
    """Employee with an active contract covering 2024."""
    employee = await make_employee(full_name="Jane Doe")
    await make_contract(employee, date(2024, 1, 1), date(2024, 12, 31))
    return employee


@pytest.fixture
def service(session, notifications) -> LeaveRequestService:
    return LeaveRequestService(session, notifications)


class TestLeaveWorkflow:
    """Draft, submit, approve and the overlap rule between approved leaves."""

    async def test_full_scenario(self, service, employee, notifications) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 10))
        assert draft.status == LeaveRequestStatus.DRAFT
        assert draft.employee_name == "Jane Doe"

        submitted = await service.submit(draft.id)
        assert submitted.status == LeaveRequestStatus.SUBMITTED

        approved = await service.approve(draft.id, "Jane")
        assert approved.status == LeaveRequestStatus.APPROVED
        assert approved.approver_name == "Jane"

        second = await new_draft(service, employee, date(2024, 6, 5), date(2024, 6, 7))
        await service.submit(second.id)
        with pytest.raises(OverlappingLeaveError):
            await service.approve(second.id, "Jane")

        still_submitted = await service.get_leave_request(second.id)
        assert still_submitted.status == LeaveRequestStatus.SUBMITTED

        events = notifications.of(HubEvent.LEAVE_REQUEST_UPDATED)
        assert [e["message"] for e in events] == ["Leave request approved by Jane"]
        assert events[0]["status"] == "Approved"

    async def test_leaves_sharing_one_day_overlap(self, service, employee, make_leave) -> None:
        await make_leave(
            employee,
            date(2024, 3, 1),
            date(2024, 3, 5),
            status=LeaveRequestStatus.APPROVED,
            approver_name="Jane",
        )
        pending = await make_leave(
            employee, date(2024, 3, 5), date(2024, 3, 8), status=LeaveRequestStatus.SUBMITTED
        )

        with pytest.raises(OverlappingLeaveError):
            await service.approve(pending.id, "Jane")

    async def test_adjacent_leaves_do_not_overlap(self, service, employee, make_leave) -> None:
        await make_leave(
            employee,
            date(2024, 3, 1),
            date(2024, 3, 5),
            status=LeaveRequestStatus.APPROVED,
            approver_name="Jane",
        )
        pending = await make_leave(
            employee, date(2024, 3, 6), date(2024, 3, 8), status=LeaveRequestStatus.SUBMITTED
        )

        approved = await service.approve(pending.id, "Sam")

        assert approved.status == LeaveRequestStatus.APPROVED
        assert approved.approver_name == "Sam"

    async def test_submit_twice_fails(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))
        await service.submit(draft.id)

        with pytest.raises(InvalidTransitionError) as exc_info:
            await service.submit(draft.id)
        assert exc_info.value.message == "Only leave requests in Draft status can be submitted"
        assert exc_info.value.details["current_status"] == "submitted"

    async def test_approve_requires_submitted(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))

        with pytest.raises(InvalidTransitionError):
            await service.approve(draft.id, "Jane")

    async def test_reject_records_approver(self, service, employee, notifications) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))
        await service.submit(draft.id)

        rejected = await service.reject(draft.id, "Jane")

        assert rejected.status == LeaveRequestStatus.REJECTED
        assert rejected.approver_name == "Jane"
        events = notifications.of(HubEvent.LEAVE_REQUEST_UPDATED)
        assert events[-1]["message"] == "Leave request rejected by Jane"

    async def test_cancel_submitted(self, service, employee, notifications) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))
        await service.submit(draft.id)

        cancelled = await service.cancel(draft.id)

        assert cancelled.status == LeaveRequestStatus.CANCELLED
        assert notifications.of(HubEvent.LEAVE_REQUEST_UPDATED)[-1]["status"] == "Cancelled"

    @pytest.mark.parametrize(
        "status",
        [
            LeaveRequestStatus.DRAFT,
            LeaveRequestStatus.APPROVED,
            LeaveRequestStatus.REJECTED,
            LeaveRequestStatus.CANCELLED,
            LeaveRequestStatus.COMPLETED,
        ],
    )
    async def test_cancel_only_from_submitted(self, service, employee, make_leave, status) -> None:
        leave_request = await make_leave(
            employee, date(2024, 6, 1), date(2024, 6, 2), status=status
        )

        with pytest.raises(InvalidTransitionError):
            await service.cancel(leave_request.id)

    async def test_missing_leave_request(self, service) -> None:
        with pytest.raises(LeaveRequestNotFoundError):
            await service.submit(123)


class TestConcurrentTransitions:
    """Status guards read the committed row, not the copy held by the session."""

    async def test_approve_after_committed_cancel_fails(
        self, service, employee, make_leave, session_factory, notifications
    ) -> None:
        leave_request = await make_leave(
            employee, date(2024, 6, 1), date(2024, 6, 2), status=LeaveRequestStatus.SUBMITTED
        )
        async with session_factory() as other_session:
            await LeaveRequestService(other_session, notifications).cancel(leave_request.id)

        with pytest.raises(InvalidTransitionError) as exc_info:
            await service.approve(leave_request.id, "Jane")
        assert exc_info.value.details["current_status"] == "cancelled"

        async with session_factory() as fresh:
            stored = await fresh.get(LeaveRequestORM, leave_request.id)
            assert stored.status == LeaveRequestStatus.CANCELLED
            assert stored.approver_name is None
        events = notifications.of(HubEvent.LEAVE_REQUEST_UPDATED)
        assert [e["status"] for e in events] == ["Cancelled"]

    async def test_cancel_after_committed_approve_fails(
        self, service, employee, make_leave, session_factory, notifications
    ) -> None:
        leave_request = await make_leave(
            employee, date(2024, 6, 1), date(2024, 6, 2), status=LeaveRequestStatus.SUBMITTED
        )
        async with session_factory() as other_session:
            await LeaveRequestService(other_session, notifications).approve(
                leave_request.id, "Sam"
            )

        with pytest.raises(InvalidTransitionError):
            await service.cancel(leave_request.id)

        async with session_factory() as fresh:
            stored = await fresh.get(LeaveRequestORM, leave_request.id)
            assert stored.status == LeaveRequestStatus.APPROVED

    async def test_edit_after_committed_submit_fails(
        self, service, employee, session_factory, notifications
    ) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))
        async with session_factory() as other_session:
            await LeaveRequestService(other_session, notifications).submit(draft.id)

        with pytest.raises(InvalidTransitionError):
            await service.update_draft(draft.id, LeaveRequestUpdate(reason="Changed plans"))


class TestDraftValidation:
    """Date checks applied to drafts."""

    async def test_range_outside_contract_is_rejected(self, service, employee) -> None:
        with pytest.raises(NoValidContractError):
            await new_draft(service, employee, date(2024, 12, 20), date(2025, 1, 5))

    async def test_range_on_contract_bounds_is_accepted(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 1, 1), date(2024, 12, 31))

        assert draft.status == LeaveRequestStatus.DRAFT

    async def test_ended_contract_does_not_cover(
        self, service, make_employee, make_contract
    ) -> None:
        employee = await make_employee()
        await make_contract(
            employee, date(2024, 1, 1), date(2024, 12, 31), status=ContractStatus.ENDED
        )

        with pytest.raises(NoValidContractError):
            await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))

    async def test_open_ended_contract_covers_future(
        self, service, make_employee, make_contract
    ) -> None:
        employee = await make_employee()
        await make_contract(employee, date(2024, 1, 1), None)

        draft = await new_draft(service, employee, date(2031, 6, 1), date(2031, 6, 30))

        assert draft.end_date == date(2031, 6, 30)

    async def test_end_before_start_is_rejected(self, service, employee) -> None:
        with pytest.raises(InvalidDateRangeError):
            await new_draft(service, employee, date(2024, 6, 2), date(2024, 6, 1))

    async def test_single_day_leave_is_valid(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 1))

        assert draft.start_date == draft.end_date

    async def test_unknown_employee(self, service) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await service.create_draft(leave_data(404, date(2024, 6, 1), date(2024, 6, 2)))

    async def test_update_keeps_omitted_fields(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))

        updated = await service.update_draft(
            draft.id, LeaveRequestUpdate(end_date=date(2024, 6, 9))
        )

        assert updated.start_date == date(2024, 6, 1)
        assert updated.end_date == date(2024, 6, 9)
        assert updated.reason == "Summer holiday"
        assert updated.leave_type == LeaveType.ANNUAL

    async def test_update_revalidates_merged_dates(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))

        with pytest.raises(InvalidDateRangeError):
            await service.update_draft(draft.id, LeaveRequestUpdate(start_date=date(2024, 6, 5)))
        with pytest.raises(NoValidContractError):
            await service.update_draft(draft.id, LeaveRequestUpdate(end_date=date(2025, 2, 1)))

    async def test_update_requires_draft(self, service, employee) -> None:
        draft = await new_draft(service, employee, date(2024, 6, 1), date(2024, 6, 2))
        await service.submit(draft.id)

        with pytest.raises(InvalidTransitionError):
            await service.update_draft(draft.id, LeaveRequestUpdate(reason="Changed"))


class TestCompleteExpiredLeaves:
    """Completion of approved leaves after their last day."""

    async def test_completes_past_approved_leave(
        self, service, employee, make_leave, notifications
    ) -> None:
        past = await make_leave(
            employee, date(2024, 1, 10), date(2024, 1, 12), status=LeaveRequestStatus.APPROVED
        )
        ongoing = await make_leave(
            employee, date(2024, 1, 30), date(2024, 2, 2), status=LeaveRequestStatus.APPROVED
        )
        submitted = await make_leave(
            employee, date(2024, 1, 3), date(2024, 1, 4), status=LeaveRequestStatus.SUBMITTED
        )

        completed = await service.complete_expired_leaves(today=date(2024, 2, 1))

        assert [c.leave_request_id for c in completed] == [past.id]
        assert past.status == LeaveRequestStatus.COMPLETED
        assert ongoing.status == LeaveRequestStatus.APPROVED
        assert submitted.status == LeaveRequestStatus.SUBMITTED
        events = notifications.of(HubEvent.LEAVE_REQUEST_UPDATED)
        assert events == [
            {
                "leave_request_id": past.id,
                "employee_id": employee.id,
                "employee_name": "Jane Doe",
                "status": "Completed",
                "message": "Leave request has been completed",
                "leave_type": "annual",
                "start_date": "2024-01-10",
                "end_date": "2024-01-12",
            }
        ]

    async def test_list_for_employee_latest_first(self, service, employee, make_leave) -> None:
        early = await make_leave(employee, date(2024, 2, 1), date(2024, 2, 2))
        late = await make_leave(employee, date(2024, 8, 1), date(2024, 8, 2))

        result = await service.list_for_employee(employee.id)

        assert [r.id for r in result] == [late.id, early.id]
