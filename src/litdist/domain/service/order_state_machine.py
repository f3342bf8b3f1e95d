"""Domain service: Order State Machine.

Moves an order along DRAFT -> PENDING -> APPROVED -> IN_ASSEMBLY ->
SHIPPED -> DELIVERED -> COMPLETED (or to REJECTED from PENDING/APPROVED)
and applies the inventory and ledger effects that belong to each edge:

    PENDING  -> APPROVED    reserve every line at the supplier
    APPROVED -> REJECTED    release those reservations
    IN_ASSEMBLY -> SHIPPED  OUTGOING entry per line at the supplier
    DELIVERED -> COMPLETED  consume the reservations at the supplier, add
                            the stock at the ordering unit, INCOMING entry
                            per line there

The order is loaded and checked while holding its order lock, so two
callers can never both act on the same status. Inventory effects, ledger
entries and saving the order share one ``InventoryLedger.atomic`` block;
the order is saved last, so a failure anywhere leaves stock and order
untouched.
"""

from __future__ import annotations

import logging

from litdist.domain.exceptions import NotFoundError
from litdist.domain.model.actor import Actor
from litdist.domain.model.order import Order, OrderStatus
from litdist.domain.model.transaction import TransactionType
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.service.inventory_ledger import InventoryLedger, StockLine
from litdist.domain.service.locking import KeyedLocks, order_key
from litdist.domain.service.notifications import (
    EventType,
    NotificationDispatcher,
    notify_safely,
)
from litdist.domain.service.transaction_ledger import TransactionLedger

logger = logging.getLogger(__name__)


class OrderStateMachine:

    def __init__(
        self,
        order_repo: OrderRepository,
        inventory_ledger: InventoryLedger,
        transaction_ledger: TransactionLedger,
        dispatcher: NotificationDispatcher | None = None,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._inventory = inventory_ledger
        self._transactions = transaction_ledger
        self._dispatcher = dispatcher
        self._locks = locks or inventory_ledger.locks

    def transition(
        self,
        order_id: int,
        target: OrderStatus,
        actor: Actor,
        notes: str | None = None,
    ) -> Order:
        with self._locks.acquire([order_key(order_id)]):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            # Fail before touching inventory
            order.check_transition(target, actor)
            previous = order.status

            supplier_lines = self._lines_at(order, order.to_organization_id)
            keys = [(org, lit) for org, lit, _ in supplier_lines]
            if target == OrderStatus.COMPLETED:
                keys += [(order.from_organization_id, lit) for _, lit, _ in supplier_lines]

            with self._inventory.atomic(keys):
                self._apply_inventory_effects(order, previous, target, supplier_lines)
                order.transition_to(target, actor)
                if notes:
                    order.notes = notes
                self._record_movements(order, target)
                self._order_repo.save(order)

        logger.info(
            "Order %s moved %s -> %s by %s",
            order.order_number, previous.value, target.value, actor.user_id,
        )
        notify_safely(
            self._dispatcher,
            EventType.ORDER_STATUS_CHANGED,
            {
                "order_id": order.id,
                "order_number": order.order_number,
                "from_organization_id": order.from_organization_id,
                "to_organization_id": order.to_organization_id,
                "old_status": previous.value,
                "new_status": target.value,
                "total_amount": str(order.total_amount.amount),
                "changed_by": actor.user_id,
            },
        )
        return order

    # --- Side effects ---------------------------------------------------------

    def _apply_inventory_effects(
        self,
        order: Order,
        previous: OrderStatus,
        target: OrderStatus,
        supplier_lines: list[StockLine],
    ) -> None:
        if target == OrderStatus.APPROVED:
            self._inventory.reserve_all(supplier_lines)
        elif target == OrderStatus.REJECTED and previous == OrderStatus.APPROVED:
            self._inventory.release_all(supplier_lines)
        elif target == OrderStatus.COMPLETED:
            self._inventory.consume_all(supplier_lines)
            for _, literature_id, qty in supplier_lines:
                self._inventory.adjust(order.from_organization_id, literature_id, qty)

    def _record_movements(self, order: Order, target: OrderStatus) -> None:
        if target == OrderStatus.SHIPPED:
            entry_type, at, counterparty = (
                TransactionType.OUTGOING, order.to_organization_id, order.from_organization_id,
            )
            note = f"Order shipment: {order.order_number}"
        elif target == OrderStatus.COMPLETED:
            entry_type, at, counterparty = (
                TransactionType.INCOMING, order.from_organization_id, order.to_organization_id,
            )
            note = f"Order delivery: {order.order_number}"
        else:
            return
        self._transactions.append([
            self._transactions.prepare(
                entry_type,
                at,
                item.literature_id,
                item.quantity.value,
                counterparty_organization_id=counterparty,
                order_id=order.id,
                unit_price=item.unit_price,
                notes=note,
            )
            for item in order.items
        ])

    @staticmethod
    def _lines_at(order: Order, organization_id: str) -> list[StockLine]:
        return [
            (organization_id, item.literature_id, item.quantity.value)
            for item in order.items
        ]
