"""Error codes and their HTTP mapping."""

import pytest

from litdist.domain.exceptions import (
    AlreadyLockedError,
    DomainException,
    InsufficientStockError,
    InvalidStatusTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    http_status_for,
)


@pytest.mark.parametrize(
    "exc,status",
    [
        (ValidationError("x"), 400),
        (PermissionDeniedError("x"), 403),
        (NotFoundError("x"), 404),
        (InsufficientStockError("x"), 409),
        (InvalidStatusTransitionError("DRAFT", "COMPLETED"), 409),
        (AlreadyLockedError("x"), 423),
        (DomainException("x"), 500),
    ],
)
def test_http_status(exc, status):
    assert http_status_for(exc) == status


def test_every_error_is_a_domain_exception():
    assert issubclass(InsufficientStockError, DomainException)
    assert InsufficientStockError.code == "insufficient_stock"
