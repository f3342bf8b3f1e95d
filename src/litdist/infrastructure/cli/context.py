"""Shared state for CLI commands and domain error translation."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

import click

from litdist.domain.exceptions import DomainException
from litdist.domain.model.actor import Actor

F = TypeVar("F", bound=Callable)

# error code -> process exit code
EXIT_CODES: dict[str, int] = {
    "validation_error": 1,
    "not_found": 3,
    "permission_denied": 4,
    "insufficient_stock": 5,
    "insufficient_reserved_stock": 5,
    "negative_stock": 5,
    "invalid_release": 5,
    "invalid_status_transition": 6,
    "order_not_editable": 6,
    "order_locked": 7,
    "already_locked": 7,
}


@dataclass(frozen=True)
class CliContext:
    data_dir: Path
    actor: Actor


pass_cli_context = click.make_pass_decorator(CliContext)


class DomainCommandError(click.ClickException):
    """A DomainException surfaced to the terminal with a specific exit code."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.exit_code = EXIT_CODES.get(exc.code, 1)


def handles_domain_errors(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DomainException as exc:
            raise DomainCommandError(exc) from exc

    return wrapper  # type: ignore[return-value]
