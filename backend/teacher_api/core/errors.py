"""Error Hierarchy — typed, categorized exceptions for all teacher portal failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TeacherPortalError base: FastAPI global handler catches all
    - Course access denial defaults to 404 so callers cannot probe for courses they
      do not belong to; attendance endpoints opt into 403
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Ids the failing request was about; rendered in the envelope and logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    vinculo_id: str | None = None
    course_id: str | None = None
    resource_id: str | None = None

    @classmethod
    def of(
        cls, vinculo_id: Any = None, course_id: Any = None, resource_id: Any = None,
    ) -> "ErrorContext":
        """Build a context from UUIDs (or anything str()-able); None stays None."""
        def text(value: Any) -> str | None:
            return None if value is None else str(value)
        return cls(
            vinculo_id=text(vinculo_id),
            course_id=text(course_id),
            resource_id=text(resource_id),
        )


class TeacherPortalError(Exception):
    """Base exception for all teacher portal errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "vinculo_id": self.context.vinculo_id,
                    "course_id": self.context.course_id,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthenticationError(TeacherPortalError):
    """Token missing, malformed, expired, or not verifiable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidInputError(TeacherPortalError):
    """Request data failed a business-level validation."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidGradeError(TeacherPortalError):
    """Grade value outside the 1.0–7.0 scale."""
    def __init__(self, value: object, context: ErrorContext | None = None):
        super().__init__(
            "nota must be a number between 1.0 and 7.0 with at most two decimals "
            f"(got {value!r})",
            "INVALID_GRADE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


class ResourceNotFoundError(TeacherPortalError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str | None = None,
        context: ErrorContext | None = None, message: str | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        if self.context.resource_id is None and resource_id is not None:
            self.context.resource_id = str(resource_id)


class CourseAccessDeniedError(TeacherPortalError):
    """Caller neither teaches in nor heads the course."""
    def __init__(
        self, message: str, http_status: int = 404,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "COURSE_ACCESS_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, http_status,
        )


class StudentNotEnrolledError(TeacherPortalError):
    """Student has no enrollment row for the course and academic year."""
    def __init__(
        self, student_id: str, course_id: str, year: int,
        context: ErrorContext | None = None,
    ):
        context = context or ErrorContext.of(course_id=course_id, resource_id=student_id)
        super().__init__(
            f"alumno {student_id} not enrolled in course {course_id} for year {year}",
            "STUDENT_NOT_ENROLLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 404,
        )
        self.student_id = student_id
        self.course_id = course_id
        self.year = year


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TeacherPortalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
