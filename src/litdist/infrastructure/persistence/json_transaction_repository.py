"""JSON-file-backed implementation of TransactionRepository (append only)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.transaction import Transaction, TransactionType
from litdist.domain.model.value_objects import DEFAULT_CURRENCY, Money
from litdist.domain.repository.transaction_repository import TransactionRepository
from litdist.infrastructure.persistence.json_file import JsonFile


class JsonTransactionRepository(TransactionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- TransactionRepository interface --------------------------------------

    def get_by_id(self, transaction_id: int) -> Transaction | None:
        for raw in self._file.load():
            if raw["id"] == transaction_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Transaction]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, transaction: Transaction) -> Transaction:
        return self.add_all([transaction])[0]

    def add_all(self, transactions: list[Transaction]) -> list[Transaction]:
        for transaction in transactions:
            if transaction.id is not None:
                raise ValidationError(f"Transaction #{transaction.id} is already recorded")
        stored: list[Transaction] = []
        with self._file.update() as entries:
            next_id = max((raw["id"] for raw in entries), default=0) + 1
            for offset, transaction in enumerate(transactions):
                entry = replace(transaction, id=next_id + offset)
                entries.append(self._to_raw(entry))
                stored.append(entry)
        return stored

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: Transaction) -> dict:
        return {
            "id": entry.id,
            "type": entry.type.value,
            "organization_id": entry.organization_id,
            "counterparty_organization_id": entry.counterparty_organization_id,
            "literature_id": entry.literature_id,
            "quantity": entry.quantity,
            "decrease": entry.decrease,
            "order_id": entry.order_id,
            "unit_price": str(entry.unit_price.amount) if entry.unit_price else None,
            "currency": entry.unit_price.currency if entry.unit_price else None,
            "reverses_id": entry.reverses_id,
            "notes": entry.notes,
            "created_at": entry.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Transaction:
        unit_price = None
        if raw.get("unit_price") is not None:
            unit_price = Money(Decimal(raw["unit_price"]), raw.get("currency") or DEFAULT_CURRENCY)
        return Transaction(
            id=raw["id"],
            type=TransactionType(raw["type"]),
            organization_id=raw["organization_id"],
            literature_id=raw["literature_id"],
            quantity=raw["quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            counterparty_organization_id=raw.get("counterparty_organization_id"),
            order_id=raw.get("order_id"),
            unit_price=unit_price,
            decrease=raw.get("decrease", False),
            reverses_id=raw.get("reverses_id"),
            notes=raw.get("notes"),
        )
