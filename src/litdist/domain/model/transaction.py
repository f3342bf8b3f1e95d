"""Transaction: one immutable stock movement in the ledger.

Not to be confused with a database transaction: entries are appended and
never edited or removed. A mistaken adjustment is undone by appending an
offsetting entry that points back at it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.value_objects import Money


class TransactionType(Enum):
    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"
    ADJUSTMENT = "ADJUSTMENT"

    @staticmethod
    def parse(raw: str) -> TransactionType:
        try:
            return TransactionType(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Invalid transaction type: {raw!r}") from exc


@dataclass(frozen=True)
class Transaction:
    """A stock movement at ``organization_id``.

    ``quantity`` is always positive; the direction comes from ``type``
    (and from ``decrease`` for adjustments). ``id`` is None until the
    repository stores the entry.
    """

    id: int | None
    type: TransactionType
    organization_id: str
    literature_id: str
    quantity: int
    created_at: datetime
    counterparty_organization_id: str | None = None
    order_id: int | None = None
    unit_price: Money | None = None
    decrease: bool = False
    reverses_id: int | None = None
    notes: str | None = None

    @property
    def signed_quantity(self) -> int:
        if self.type == TransactionType.INCOMING:
            return self.quantity
        if self.type == TransactionType.OUTGOING:
            return -self.quantity
        return -self.quantity if self.decrease else self.quantity

    @property
    def total_amount(self) -> Money | None:
        if self.unit_price is None:
            return None
        return self.unit_price * self.quantity

    def involves(self, organization_id: str) -> bool:
        return organization_id in (self.organization_id, self.counterparty_organization_id)
