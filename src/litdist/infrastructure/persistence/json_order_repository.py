"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.order import Order, OrderItem, OrderStatus
from litdist.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from litdist.domain.repository.order_repository import OrderRepository
from litdist.infrastructure.persistence.json_file import JsonFile


def _dt(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.update() as orders:
            if order.id is None:
                order.id = max((o["id"] for o in orders), default=0) + 1

            for raw in orders:
                if raw["order_number"] == order.order_number and raw["id"] != order.id:
                    raise ValidationError(f"Order number {order.order_number} already exists")

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

    def delete(self, order_id: int) -> None:
        with self._file.update() as orders:
            orders[:] = [raw for raw in orders if raw["id"] != order_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "from_organization_id": order.from_organization_id,
            "to_organization_id": order.to_organization_id,
            "status": order.status.value,
            "created_by": order.created_by,
            "locked_by": order.locked_by,
            "locked_at": order.locked_at.isoformat() if order.locked_at else None,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            # derived, stored for external readers only
            "total_amount": str(order.total_amount.amount),
            "items": [
                {
                    "literature_id": item.literature_id,
                    "title": item.title,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                literature_id=i["literature_id"],
                title=i["title"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", DEFAULT_CURRENCY)),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            from_organization_id=raw["from_organization_id"],
            to_organization_id=raw["to_organization_id"],
            items=items,
            status=OrderStatus(raw["status"]),
            created_by=raw.get("created_by"),
            locked_by=raw.get("locked_by"),
            locked_at=_dt(raw.get("locked_at")),
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw.get("updated_at") or raw["created_at"]),
        )
