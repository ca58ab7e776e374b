"""Error Hierarchy — typed, categorized exceptions for every Data API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error serializes to the single-field ErrorResponse: {"error": message}
    - Invalid-argument and not-found errors log at WARNING; everything else at ERROR
    - No stack traces or internal details in user-facing messages

Design Decisions:
    - Single hierarchy with DataApiError base: one FastAPI handler catches all
    - Collaborators raise MetadataNotFoundError / OperatorNotFoundError instead of
      returning error strings, so routes never parse messages to pick a status
"""

from enum import Enum

from dataapi.schemas.common import ErrorResponse


class ErrorSeverity(str, Enum):
    """Error severity for log level selection."""
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(str, Enum):
    """High-level error categories, one per HTTP outcome class."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    UNIMPLEMENTED = "unimplemented"


class DataApiError(Exception):
    """Base exception for all Data API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the ErrorResponse wire shape."""
        return ErrorResponse(error=self.message).model_dump()


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidArgumentError(DataApiError):
    """A path or query parameter failed validation."""
    def __init__(self, message: str, param: str):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.INVALID_ARGUMENT,
            ErrorSeverity.WARNING, 400,
        )
        self.param = param


class ResourceNotFoundError(DataApiError):
    """Requested entity does not exist."""
    def __init__(self, message: str = "not found"):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class UpstreamError(DataApiError):
    """A collaborator call failed for a reason other than not-found."""
    def __init__(self, message: str):
        super().__init__(
            message, "UPSTREAM_ERROR", ErrorCategory.UPSTREAM,
            ErrorSeverity.ERROR, 500,
        )


class UnimplementedError(DataApiError):
    """Placeholder endpoint with no backing implementation yet."""
    def __init__(self, handler_name: str):
        super().__init__(
            f"{handler_name} unimplemented", "UNIMPLEMENTED",
            ErrorCategory.UNIMPLEMENTED, ErrorSeverity.ERROR, 500,
        )
        self.handler_name = handler_name


# ─── Collaborator Signals ───────────────────────────────────────
# Raised by the metadata store / operator handler; routes translate them.

class NotFoundSignal(LookupError):
    """Base for structured not-found signals raised by collaborators."""


class MetadataNotFoundError(NotFoundSignal):
    """Metadata store has no record for the requested key."""


class MetadataStoreError(Exception):
    """Metadata store could not complete the lookup."""
    def __init__(self, message: str, operation: str):
        super().__init__(f"metadata store {operation} failed: {message}")
        self.operation = operation


class OperatorNotFoundError(NotFoundSignal):
    """Operator id is not registered."""
    def __init__(self, operator_id: str):
        super().__init__(f"operator {operator_id} not found")
        self.operator_id = operator_id


NOT_FOUND_MARKER = "not found"


def is_not_found(exc: Exception) -> bool:
    """Classify a collaborator exception as not-found.

    Structured signals (NotFoundSignal subclasses) win. Foreign exception types
    fall back to matching the "not found" marker in the message, which breaks
    silently if a collaborator rewords its errors.
    """
    if isinstance(exc, NotFoundSignal):
        return True
    return NOT_FOUND_MARKER in str(exc)
