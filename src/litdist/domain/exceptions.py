"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a stable ``code`` that outer layers map to exit codes or
HTTP statuses (see ``HTTP_STATUS``).
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "domain_error"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "validation_error"


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "not_found"


class PermissionDeniedError(DomainException):
    """The acting user's role does not allow the operation."""

    code = "permission_denied"


# --- Inventory ----------------------------------------------------------------


class InsufficientStockError(DomainException):
    """Available stock is smaller than the requested quantity."""

    code = "insufficient_stock"


class InsufficientReservedStockError(DomainException):
    """Reserved stock is smaller than the quantity being consumed."""

    code = "insufficient_reserved_stock"


class NegativeStockError(DomainException):
    """An adjustment would drive on-hand stock below zero."""

    code = "negative_stock"


class InvalidReleaseError(DomainException):
    """A strict release asked for more than is currently reserved."""

    code = "invalid_release"


# --- Orders -------------------------------------------------------------------


class InvalidStatusTransitionError(DomainException):
    """The requested status is not reachable from the current one."""

    code = "invalid_status_transition"

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Invalid status transition from {current} to {requested}"
        )
        self.current = current
        self.requested = requested


class OrderLockedError(DomainException):
    """The order is locked by another user."""

    code = "order_locked"


class OrderNotEditableError(DomainException):
    """Line items can only change while the order is DRAFT or PENDING."""

    code = "order_not_editable"


class AlreadyLockedError(DomainException):
    """A lock was requested on an order another user already holds."""

    code = "already_locked"


HTTP_STATUS: dict[str, int] = {
    ValidationError.code: 400,
    PermissionDeniedError.code: 403,
    NotFoundError.code: 404,
    InsufficientStockError.code: 409,
    InsufficientReservedStockError.code: 409,
    NegativeStockError.code: 409,
    InvalidReleaseError.code: 409,
    InvalidStatusTransitionError.code: 409,
    OrderNotEditableError.code: 409,
    OrderLockedError.code: 423,
    AlreadyLockedError.code: 423,
}


def http_status_for(exc: DomainException) -> int:
    """Return the HTTP status an API layer should answer with."""
    return HTTP_STATUS.get(exc.code, 500)
