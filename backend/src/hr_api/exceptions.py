"""Domain-specific exceptions for the HR API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from datetime import date
from typing import Any


class HRAPIError(Exception):
    """Base exception for all HR API errors."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(HRAPIError):
    """Base class for resource not found errors."""

    error_code = "NOT_FOUND"


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    error_code = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int | None = None) -> None:
        message = f"Employee with ID {employee_id} not found" if employee_id else "Employee not found"
        details = {"employee_id": employee_id} if employee_id else {}
        super().__init__(message, details)


class ContractNotFoundError(NotFoundError):
    """Raised when an employment contract cannot be found."""

    error_code = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: int | None = None) -> None:
        message = f"Contract with ID {contract_id} not found" if contract_id else "Contract not found"
        details = {"contract_id": contract_id} if contract_id else {}
        super().__init__(message, details)


class LeaveRequestNotFoundError(NotFoundError):
    """Raised when a leave request cannot be found."""

    error_code = "LEAVE_REQUEST_NOT_FOUND"

    def __init__(self, leave_request_id: int | None = None) -> None:
        message = (
            f"Leave request with ID {leave_request_id} not found"
            if leave_request_id
            else "Leave request not found"
        )
        details = {"leave_request_id": leave_request_id} if leave_request_id else {}
        super().__init__(message, details)


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department cannot be found."""

    error_code = "DEPARTMENT_NOT_FOUND"

    def __init__(self, department_id: int | None = None) -> None:
        details = {"department_id": department_id} if department_id else {}
        super().__init__("Department not found", details)


class PositionNotFoundError(NotFoundError):
    """Raised when a position cannot be found."""

    error_code = "POSITION_NOT_FOUND"

    def __init__(self, position_id: int | None = None) -> None:
        details = {"position_id": position_id} if position_id else {}
        super().__init__("Position not found", details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(HRAPIError):
    """Base class for resource conflict errors."""

    error_code = "CONFLICT"


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when an employee with the same email already exists."""

    error_code = "EMAIL_ALREADY_EXISTS"

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Employee with this email already exists", details)


class EmployeeIsManagerError(ConflictError):
    """Raised when deleting an employee who still manages a department."""

    error_code = "EMPLOYEE_IS_MANAGER"

    def __init__(self, employee_id: int, department_ids: list[int]) -> None:
        super().__init__(
            "Employee manages a department and cannot be deleted",
            {"employee_id": employee_id, "department_ids": department_ids},
        )


class OverlapError(ConflictError):
    """Base class for temporal overlap violations."""

    error_code = "OVERLAP"


class OverlappingContractError(OverlapError):
    """Raised when a new active contract intersects an existing one."""

    error_code = "OVERLAPPING_CONTRACT"

    def __init__(self, employee_id: int, start_date: date, end_date: date | None) -> None:
        super().__init__(
            "Employee already has an active contract that overlaps with the specified date range",
            {
                "employee_id": employee_id,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat() if end_date else None,
            },
        )


class OverlappingLeaveError(OverlapError):
    """Raised when approving a leave would intersect another approved leave."""

    error_code = "OVERLAPPING_LEAVE"

    def __init__(self, leave_request_id: int, employee_id: int) -> None:
        super().__init__(
            "Employee already has an approved leave request that overlaps with this date range",
            {"leave_request_id": leave_request_id, "employee_id": employee_id},
        )


class InvalidTransitionError(ConflictError):
    """Raised when a lifecycle action is not allowed from the current state."""

    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, action: str, required_status: str, current_status: str) -> None:
        super().__init__(
            f"Only leave requests in {required_status} status can be {action}",
            {
                "action": action,
                "required_status": required_status,
                "current_status": current_status,
            },
        )


# =============================================================================
# Validation Errors (422)
# =============================================================================


class ValidationError(HRAPIError):
    """Base class for validation errors."""

    error_code = "VALIDATION_ERROR"


class InvalidDateRangeError(ValidationError):
    """Raised when an end date precedes its start date."""

    error_code = "INVALID_DATE_RANGE"

    def __init__(self, start_date: date, end_date: date) -> None:
        super().__init__(
            "End date must be on or after the start date",
            {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )


class NoValidContractError(ValidationError):
    """Raised when leave dates do not fit inside any active contract."""

    error_code = "NO_VALID_CONTRACT"

    def __init__(self, employee_id: int, start_date: date, end_date: date) -> None:
        super().__init__(
            "Leave request dates must fall within an active employment contract period",
            {
                "employee_id": employee_id,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )


class InvalidReferenceError(ValidationError):
    """Raised when a payload references a department, position or manager that does not exist."""

    error_code = "INVALID_REFERENCE"

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} not found", {f"{entity.lower()}_id": entity_id})
        self.error_code = f"{entity.upper()}_NOT_FOUND"


# =============================================================================
# Infrastructure Errors (500)
# =============================================================================


class PersistenceError(HRAPIError):
    """Raised when the storage layer rejects or cannot complete a commit."""

    error_code = "PERSISTENCE_ERROR"

    def __init__(self, message: str = "The change could not be saved") -> None:
        super().__init__(message)
