"""Typed domain exceptions for API error mapping.

Services raise these; a single exception handler in main.py renders them as
``{"message": ..., "error": ...}`` with the exception's status code.

Usage:
    # In service layer
    raise NotFoundError("Order", order_id)
    raise RequiredParameterMissing("Office ID is required", code="OFFICE_REQUIRED")
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    status_code = 500
    default_code = "SERVER_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(DomainError):
    """Validation failure. Maps to HTTP 400."""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class RequiredParameterMissing(ValidationError):
    """A mandatory query/body parameter was not supplied. Maps to HTTP 400."""


class IneligibleForReorder(DomainError):
    """Reorder requested against an order that is not eligible. Maps to HTTP 400."""

    status_code = 400
    default_code = "NOT_ELIGIBLE_FOR_REORDER"

    def __init__(self, order_id: str | None = None) -> None:
        super().__init__("Order is not eligible for reorder")
        self.order_id = order_id


class AuthenticationError(DomainError):
    """Missing or invalid credentials. Maps to HTTP 401."""

    status_code = 401
    default_code = "NOT_AUTHENTICATED"


class AuthorizationError(DomainError):
    """Caller's role scope excludes the resource. Maps to HTTP 403."""

    status_code = 403
    default_code = "ACCESS_DENIED"

    def __init__(self, message: str = "Access denied", code: str | None = None) -> None:
        super().__init__(message, code)


class NotFoundError(DomainError):
    """Resource was not found. Maps to HTTP 404."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        identifier: object = None,
        *,
        message: str | None = None,
    ) -> None:
        if not message:
            message = (
                f"{resource_type} not found"
                if identifier is None
                else f"{resource_type} '{identifier}' not found"
            )
        super().__init__(message)
        self.resource_type = resource_type
        self.identifier = identifier


class ConflictError(DomainError):
    """Resource conflict (e.g., duplicate). Maps to HTTP 409."""

    status_code = 409
    default_code = "CONFLICT"


class ServerError(DomainError):
    """Unexpected failure in a collaborator (storage, rendering). Maps to HTTP 500."""
