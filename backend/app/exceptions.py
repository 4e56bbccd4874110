"""
NoteShare Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every error the API can report.
How:   Each exception carries a stable machine-readable `code`, a user-facing
       `message`, the HTTP `status_code` it maps to, and an optional context
       dict that is logged but never returned to the client.
Who:   Raised by services and the database layer; rendered by the global
       handlers registered in main.py as {"code": ..., "message": ...}.

Exception Hierarchy:
    NoteShareError (base)              → 500
    ├── ValidationError                → 400 Bad Request
    ├── UnprocessableError             → 422 Unprocessable Entity
    ├── NotFoundError                  → 404 Not Found
    ├── ConflictError                  → 409 Conflict
    ├── PayloadTooLargeError           → 413 Payload Too Large
    ├── DatabaseError                  → 500 (code "internal")
    └── LLMServiceError                → 500 (code "upstream_error")
"""

from typing import Any, Dict, Optional


class NoteShareError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code:         Machine-readable identifier, distinct from the HTTP status
        message:      User-facing description (safe to return in a response)
        context:      Debug info for server logs only
        status_code:  HTTP status used by the global handler
    """

    status_code: int = 500
    default_code: str = "internal"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteShareError):
    """
    Client input is missing or malformed and can be corrected.

    HTTP: 400 Bad Request. Used for empty required fields and non-positive ids.
    """

    status_code = 400
    default_code = "validation_error"

    def __init__(
        self,
        code: str,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, code=code, context=ctx)
        self.field = field


class UnprocessableError(ValidationError):
    """
    Input is well-formed but violates a business rule.

    HTTP: 422. Examples: email without "@", short password, unknown role,
    note author who is not a member of the target group.
    """

    status_code = 422


class NotFoundError(NoteShareError):
    """
    A referenced entity does not exist.

    HTTP: 404. Existence is checked explicitly by services before any
    dependent write; foreign-key failures are not used for this.
    """

    status_code = 404
    default_code = "not_found"

    def __init__(
        self,
        code: str,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, code=code, context=ctx)


class ConflictError(NoteShareError):
    """A unique constraint would be violated (e.g. email already registered)."""

    status_code = 409
    default_code = "conflict"

    def __init__(
        self,
        code: str,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, context=context)


class PayloadTooLargeError(NoteShareError):
    """
    Request body exceeds the configured byte ceiling.

    HTTP: 413. Raised before the body is parsed, regardless of content.
    """

    status_code = 413
    default_code = "payload_too_large"

    def __init__(
        self,
        max_bytes: int,
        actual_bytes: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Request body exceeds the maximum of {max_bytes} bytes."
        ctx = context or {}
        ctx["max_bytes"] = max_bytes
        if actual_bytes is not None:
            ctx["actual_bytes"] = actual_bytes
        super().__init__(message=message, context=ctx)
        self.max_bytes = max_bytes


class DatabaseError(NoteShareError):
    """
    A database operation failed unexpectedly.

    HTTP: 500. The client always receives a generic message; the driver
    error is logged server-side through `context`.
    """

    default_code = "internal"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LLMServiceError(NoteShareError):
    """
    The completion endpoint failed, was unreachable, or returned a response
    without a usable summary.

    HTTP: 500. There is no retry; the failure is reported immediately.
    """

    default_code = "upstream_error"

    def __init__(
        self,
        message: str = "The summarization service failed",
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, context=context)
