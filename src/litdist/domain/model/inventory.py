"""InventoryRecord aggregate: stock and reservations per (organization, title).

Counts only change through ``reserve``, ``release``, ``consume`` and
``adjust``; nothing overwrites them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from litdist.domain.exceptions import (
    InsufficientReservedStockError,
    InsufficientStockError,
    InvalidReleaseError,
    NegativeStockError,
    ValidationError,
)

InventoryKey = tuple[str, str]


def _positive(quantity: int, action: str) -> None:
    if quantity <= 0:
        raise ValidationError(f"{action} quantity must be positive")


@dataclass
class InventoryRecord:
    """Stock of one title held by one organization.

    Invariants:
    - ``0 <= reserved_quantity <= quantity``
    - ``available_quantity`` is always >= 0
    """

    organization_id: str
    literature_id: str
    quantity: int = 0
    reserved_quantity: int = 0
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> InventoryKey:
        return (self.organization_id, self.literature_id)

    @property
    def available_quantity(self) -> int:
        return self.quantity - self.reserved_quantity

    def reserve(self, quantity: int) -> None:
        """Hold stock against an approved order."""
        _positive(quantity, "Reservation")
        if quantity > self.available_quantity:
            raise InsufficientStockError(
                f"Insufficient stock of literature '{self.literature_id}' at "
                f"'{self.organization_id}' (need {quantity}, "
                f"have {self.available_quantity} available)"
            )
        self.reserved_quantity += quantity
        self._touch()

    def release(self, quantity: int, strict: bool = False) -> int:
        """Give reserved stock back and return how much was released.

        Asking for more than is reserved clamps to the reserved amount,
        unless *strict* is set.
        """
        _positive(quantity, "Release")
        if quantity > self.reserved_quantity:
            if strict:
                raise InvalidReleaseError(
                    f"Cannot release {quantity} of literature '{self.literature_id}' "
                    f"- only {self.reserved_quantity} currently reserved"
                )
            quantity = self.reserved_quantity
        self.reserved_quantity -= quantity
        self._touch()
        return quantity

    def consume(self, quantity: int) -> None:
        """Turn reserved stock into shipped stock.

        Both ``quantity`` and ``reserved_quantity`` drop by the same amount.
        """
        _positive(quantity, "Consume")
        if quantity > self.reserved_quantity:
            raise InsufficientReservedStockError(
                f"Cannot consume {quantity} of literature '{self.literature_id}' "
                f"- only {self.reserved_quantity} currently reserved"
            )
        self.reserved_quantity -= quantity
        self.quantity -= quantity
        self._touch()

    def adjust(self, delta: int) -> None:
        """Correct on-hand stock, e.g. after a physical count."""
        if delta == 0:
            raise ValidationError("Adjustment must not be zero")
        new_quantity = self.quantity + delta
        if new_quantity < 0:
            raise NegativeStockError(
                f"Adjustment would result in negative stock "
                f"(current {self.quantity}, change {delta})"
            )
        if new_quantity < self.reserved_quantity:
            raise NegativeStockError(
                f"Adjustment would leave less stock than reserved "
                f"(new {new_quantity}, reserved {self.reserved_quantity})"
            )
        self.quantity = new_quantity
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
