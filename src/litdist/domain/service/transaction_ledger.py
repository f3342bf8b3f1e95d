"""Domain service: Transaction Ledger.

Append-only log of stock movements. Entries are written by the order state
machine (shipments and deliveries) and by manual inventory adjustments, and
read back for movement reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from litdist.domain.exceptions import NotFoundError, ValidationError
from litdist.domain.model.transaction import Transaction, TransactionType
from litdist.domain.model.value_objects import Money
from litdist.domain.repository.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MovementTotals:
    type: TransactionType
    count: int
    quantity: int


class TransactionLedger:

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._transaction_repo = transaction_repo
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def record(self, type: TransactionType, organization_id: str, literature_id: str,
               quantity: int, **details) -> Transaction:
        """Validate, timestamp and append one entry."""
        entry = self.prepare(type, organization_id, literature_id, quantity, **details)
        return self.append([entry])[0]

    def append(self, entries: list[Transaction]) -> list[Transaction]:
        """Store prepared entries in one write; IDs are assigned by the repository."""
        stored = self._transaction_repo.add_all(entries)
        for entry in stored:
            logger.info(
                "Recorded %s #%d: %+d of %s at %s",
                entry.type.value, entry.id, entry.signed_quantity,
                entry.literature_id, entry.organization_id,
            )
        return stored

    def prepare(
        self,
        type: TransactionType,
        organization_id: str,
        literature_id: str,
        quantity: int,
        *,
        counterparty_organization_id: str | None = None,
        order_id: int | None = None,
        unit_price: Money | None = None,
        decrease: bool = False,
        reverses_id: int | None = None,
        notes: str | None = None,
    ) -> Transaction:
        """Validate and timestamp an entry without storing it."""
        if not isinstance(type, TransactionType):
            raise ValidationError(f"Invalid transaction type: {type!r}")
        if not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Transaction quantity must be positive")
        if decrease and type != TransactionType.ADJUSTMENT:
            raise ValidationError("Only adjustments can decrease stock directly")
        if not organization_id or not literature_id:
            raise ValidationError("Organization and literature are required")

        return Transaction(
            id=None,
            type=type,
            organization_id=organization_id,
            literature_id=literature_id,
            quantity=quantity,
            created_at=self._clock(),
            counterparty_organization_id=counterparty_organization_id,
            order_id=order_id,
            unit_price=unit_price,
            decrease=decrease,
            reverses_id=reverses_id,
            notes=notes,
        )

    def get(self, transaction_id: int) -> Transaction:
        entry = self._transaction_repo.get_by_id(transaction_id)
        if entry is None:
            raise NotFoundError(f"Transaction #{transaction_id} not found")
        return entry

    def find(
        self,
        organization_id: str | None = None,
        literature_id: str | None = None,
        order_id: int | None = None,
        type: TransactionType | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[Transaction]:
        """Filter entries, newest first.

        An organization matches on either side of a movement.
        """
        result = []
        for entry in self._transaction_repo.list_all():
            if organization_id is not None and not entry.involves(organization_id):
                continue
            if literature_id is not None and entry.literature_id != literature_id:
                continue
            if order_id is not None and entry.order_id != order_id:
                continue
            if type is not None and entry.type != type:
                continue
            if date_from is not None and entry.created_at < date_from:
                continue
            if date_to is not None and entry.created_at > date_to:
                continue
            result.append(entry)
        return sorted(result, key=lambda e: (e.created_at, e.id), reverse=True)

    def check_reversible(self, transaction_id: int) -> Transaction:
        """Return the entry if ``reverse`` would accept it, else raise.

        Movements linked to an order belong to its lifecycle and cannot be
        reversed by hand.
        """
        original = self.get(transaction_id)
        if original.order_id is not None:
            raise ValidationError("Cannot reverse transaction linked to an order")
        if original.type != TransactionType.ADJUSTMENT:
            raise ValidationError(f"Cannot reverse {original.type.value} transaction")
        if original.reverses_id is not None:
            raise ValidationError("Cannot reverse a reversal entry")
        if any(e.reverses_id == original.id for e in self._transaction_repo.list_all()):
            raise ValidationError(f"Transaction #{original.id} is already reversed")
        return original

    def reverse(self, transaction_id: int, notes: str | None = None) -> Transaction:
        """Cancel an adjustment by appending an offsetting entry."""
        original = self.check_reversible(transaction_id)
        reason = f"Reversal of transaction #{original.id}"
        if notes:
            reason = f"{reason}: {notes}"
        return self.record(
            TransactionType.ADJUSTMENT,
            original.organization_id,
            original.literature_id,
            original.quantity,
            unit_price=original.unit_price,
            decrease=not original.decrease,
            reverses_id=original.id,
            notes=reason,
        )

    def movement_summary(self, **filters) -> list[MovementTotals]:
        """Count and quantity per transaction type for ``find(**filters)``."""
        entries = self.find(**filters)
        return [
            MovementTotals(
                type=t,
                count=sum(1 for e in entries if e.type == t),
                quantity=sum(e.signed_quantity for e in entries if e.type == t),
            )
            for t in TransactionType
        ]
