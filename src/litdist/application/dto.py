"""Data Transfer Objects returned by the application handlers.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.model.order import Order
from litdist.domain.model.transaction import Transaction


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: which title and how many."""

    literature_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    literature_id: str
    title: str
    quantity: int
    unit_price: str  # formatted, e.g. "500.00 RUB"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_number: str
    from_organization_id: str
    to_organization_id: str
    status: str
    items: list[OrderItemDTO]
    total: str
    locked_by: str | None
    created_by: str | None
    notes: str | None
    created_at: str
    updated_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            from_organization_id=order.from_organization_id,
            to_organization_id=order.to_organization_id,
            status=order.status.value,
            items=[
                OrderItemDTO(
                    literature_id=item.literature_id,
                    title=item.title,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total_amount),
            locked_by=order.locked_by,
            created_by=order.created_by,
            notes=order.notes,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            updated_at=order.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class InventoryLineDTO:
    organization_id: str
    literature_id: str
    quantity: int
    reserved: int
    available: int

    @staticmethod
    def from_record(record: InventoryRecord) -> InventoryLineDTO:
        return InventoryLineDTO(
            organization_id=record.organization_id,
            literature_id=record.literature_id,
            quantity=record.quantity,
            reserved=record.reserved_quantity,
            available=record.available_quantity,
        )


@dataclass(frozen=True)
class TransactionDTO:
    id: int
    type: str
    organization_id: str
    counterparty_organization_id: str | None
    literature_id: str
    quantity: int  # signed
    order_id: int | None
    reverses_id: int | None
    notes: str | None
    created_at: str

    @staticmethod
    def from_transaction(entry: Transaction) -> TransactionDTO:
        return TransactionDTO(
            id=entry.id,
            type=entry.type.value,
            organization_id=entry.organization_id,
            counterparty_organization_id=entry.counterparty_organization_id,
            literature_id=entry.literature_id,
            quantity=entry.signed_quantity,
            order_id=entry.order_id,
            reverses_id=entry.reverses_id,
            notes=entry.notes,
            created_at=entry.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )


@dataclass(frozen=True)
class CheckReport:
    """Outcome of a scheduled check run."""

    sent: int
    failed: int
