"""Application services: add, update and remove order line items.

Editing is only allowed while the order is DRAFT or PENDING and not locked
by someone else; the aggregate enforces both. The order total follows
automatically because it is computed from the lines. Each edit holds the
order key, so it never overwrites a concurrent status change.
"""

from __future__ import annotations

from litdist.application._lookups import get_active_literature, get_order
from litdist.application.dto import OrderDTO
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.order import OrderItem
from litdist.domain.model.value_objects import Money, Quantity
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.service.locking import KeyedLocks, default_locks, order_key


class AddOrderItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        literature_repo: LiteratureRepository,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._literature_repo = literature_repo
        self._locks = locks or default_locks()

    def handle(
        self,
        actor: Actor,
        order_id: int,
        literature_id: str,
        quantity: int,
        unit_price: str | None = None,
    ) -> OrderDTO:
        """Add a line; the price defaults to the current catalog price."""
        actor.require(Permission.CREATE_ORDERS)
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            order.ensure_editable(actor)
            literature = get_active_literature(self._literature_repo, literature_id)

            price = Money.of(unit_price) if unit_price is not None else literature.price
            order.add_item(
                OrderItem(
                    literature_id=literature.id,
                    title=literature.title,
                    quantity=Quantity(quantity),
                    unit_price=price,
                ),
                actor,
            )
            self._order_repo.save(order)
        return OrderDTO.from_order(order)


class UpdateOrderItemHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks | None = None) -> None:
        self._order_repo = order_repo
        self._locks = locks or default_locks()

    def handle(self, actor: Actor, order_id: int, literature_id: str, quantity: int) -> OrderDTO:
        actor.require(Permission.CREATE_ORDERS)
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            order.update_item_quantity(literature_id, Quantity(quantity), actor)
            self._order_repo.save(order)
        return OrderDTO.from_order(order)


class RemoveOrderItemHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks | None = None) -> None:
        self._order_repo = order_repo
        self._locks = locks or default_locks()

    def handle(self, actor: Actor, order_id: int, literature_id: str) -> OrderDTO:
        actor.require(Permission.CREATE_ORDERS)
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            order.remove_item(literature_id, actor)
            self._order_repo.save(order)
        return OrderDTO.from_order(order)
