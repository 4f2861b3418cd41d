"""Error Hierarchy — typed, categorized exceptions for all service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; dependency errors (500-level) are critical
    - to_response() always carries a top-level "message" field
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ServiceError base: the global handler in
      api/error_handlers.py catches all of them (uniform error shape)
    - DuplicateKeyError stays a dependency error until a handler decides what
      the conflicting field means for its resource
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base exception for all records-api errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the JSON error body returned to clients."""
        body = {
            "message": self.message,
            "code": self.code,
            "category": self.category.value,
        }
        if self.details:
            body["details"] = self.details
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(ServiceError):
    """Missing or wrongly-typed required field."""
    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, details,
        )


class ConflictError(ServiceError):
    """Uniqueness violation, pre-checked or store-detected."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class AuthError(ServiceError):
    """Bad credentials. Same message for unknown account and wrong password."""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(
            message, "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


# ─── Dependency Errors (500-level) ──────────────────────────────

class DependencyError(ServiceError):
    """A dependency (database, hashing primitive) failed."""
    def __init__(self, message: str, code: str = "DEPENDENCY_ERROR"):
        super().__init__(
            message, code, ErrorCategory.DEPENDENCY,
            ErrorSeverity.CRITICAL, 500,
        )


class DatabaseError(DependencyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}", "DATABASE_ERROR",
        )
        self.operation = operation


class DatabaseUnavailableError(DatabaseError):
    """Database unreachable, disconnected or timed out."""
    def __init__(self, operation: str = "connect"):
        super().__init__("database unavailable", operation)
        self.code = "DATABASE_UNAVAILABLE"


class DuplicateKeyError(DatabaseError):
    """Store-level uniqueness constraint rejected a write."""
    def __init__(self, field: str | None, operation: str = "insert"):
        super().__init__(f"duplicate key on {field or 'unknown field'}", operation)
        self.code = "DUPLICATE_KEY"
        self.field = field


class CredentialHashError(DependencyError):
    """Password hashing or stored-hash decoding failed."""
    def __init__(self, message: str = "credential hashing failed"):
        super().__init__(message, "CREDENTIAL_HASH_ERROR")
