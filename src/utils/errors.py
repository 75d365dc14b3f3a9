"""Custom exception classes and error response utilities."""

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Sequence


@dataclass
class FieldError:
    """Error details for a specific field."""

    field: str
    message: str
    code: str = "invalid"

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON response."""
        return {
            "field": self.field,
            "message": self.message,
            "code": self.code,
        }


@dataclass
class ErrorResponse:
    """Structured error response for API endpoints."""

    message: str
    status_code: int
    error_code: str
    details: Optional[Dict[str, Any]] = None
    field_errors: List[FieldError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "error": {
                "message": self.message,
                "code": self.error_code,
            }
        }

        if self.details:
            result["error"]["details"] = self.details

        if self.field_errors:
            result["error"]["field_errors"] = [
                fe.to_dict() for fe in self.field_errors
            ]

        return result


class APIError(Exception):
    """Base exception for API errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        field_errors: Optional[List[FieldError]] = None,
    ):
        self.message = message or self.__class__.message
        self.details = details
        self.field_errors = field_errors or []
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to structured error response."""
        return ErrorResponse(
            message=self.message,
            status_code=self.status_code,
            error_code=self.error_code,
            details=self.details,
            field_errors=self.field_errors,
        )


class NotFoundError(APIError):
    """Exception for resource not found."""

    status_code: int = HTTPStatus.NOT_FOUND
    error_code: str = "not_found"
    message: str = "Resource not found"


class DatabaseError(APIError):
    """Exception for database operation failures."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    error_code: str = "database_error"
    message: str = "Database operation failed"


# =============================================================================
# Business Rule Violations
# =============================================================================

class ViolationCode(str, Enum):
    """Codes identifying which business rule rejected a record."""

    # Department rules
    INVALID_PATCH = "INVALID_PATCH"
    DEPARTMENT_FIELDS_REQUIRED = "DEPARTMENT_FIELDS_REQUIRED"
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    DEPT_NO_NOT_UNIQUE = "DEPT_NO_NOT_UNIQUE"
    LOOKUP_FAILED = "LOOKUP_FAILED"
    INVALID_DEPARTMENT = "INVALID_DEPARTMENT"

    # Employee rules
    INVALID_MANAGER = "INVALID_MANAGER"
    INVALID_HIRE_DATE = "INVALID_HIRE_DATE"
    WEEKEND_HIRE_DATE = "WEEKEND_HIRE_DATE"
    DUPLICATE_EMPLOYEE_NUMBER = "DUPLICATE_EMPLOYEE_NUMBER"
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"

    # Timecard rules
    INVALID_START_TIME = "INVALID_START_TIME"
    WEEKEND_START_TIME = "WEEKEND_START_TIME"
    START_OUTSIDE_BUSINESS_HOURS = "START_OUTSIDE_BUSINESS_HOURS"
    START_OUTSIDE_CURRENT_WEEK = "START_OUTSIDE_CURRENT_WEEK"
    INVALID_END_TIME = "INVALID_END_TIME"
    TIMECARD_TOO_SHORT = "TIMECARD_TOO_SHORT"
    END_NOT_SAME_DAY = "END_NOT_SAME_DAY"
    END_OUTSIDE_BUSINESS_HOURS = "END_OUTSIDE_BUSINESS_HOURS"
    DUPLICATE_TIMECARD = "DUPLICATE_TIMECARD"


@dataclass
class ViolationDetail:
    """A single violated rule."""

    code: ViolationCode
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "field": self.field,
        }


class RuleViolation(APIError):
    """
    Base exception for business rule failures.

    Carries the violated rules as ViolationDetail entries so callers can
    render every problem, or just the message for direct display.
    """

    status_code: int = HTTPStatus.UNPROCESSABLE_ENTITY
    error_code: str = "rule_violation"
    message: str = "Business rule violated"

    def __init__(
        self,
        message: Optional[str] = None,
        violations: Optional[Sequence[ViolationDetail]] = None,
    ):
        self.violations: List[ViolationDetail] = list(violations or [])
        field_errors = [
            FieldError(field=v.field, message=v.message, code=v.code.value)
            for v in self.violations
            if v.field
        ]
        super().__init__(
            message=message,
            details={"violations": [v.to_dict() for v in self.violations]},
            field_errors=field_errors,
        )

    @property
    def codes(self) -> List[ViolationCode]:
        return [v.code for v in self.violations]


class SingleViolation(RuleViolation):
    """Raised by a single-purpose validator on the first rule it finds broken."""

    def __init__(
        self,
        code: ViolationCode,
        message: str,
        field: Optional[str] = None,
    ):
        self.code = code
        super().__init__(message, [ViolationDetail(code, message, field)])


class AggregateViolation(RuleViolation):
    """Raised when a collected validation result is rejected as a whole."""

    def __init__(self, violations: Sequence[ViolationDetail]):
        messages = ", ".join(v.message for v in violations)
        super().__init__(f"Validation failed: {messages}", violations)


def create_not_found_error(resource_type: str, identifier: Any) -> NotFoundError:
    """Create a not found error for a specific resource."""
    return NotFoundError(
        message=f"{resource_type} not found",
        details={"resource_type": resource_type, "identifier": str(identifier)},
    )
