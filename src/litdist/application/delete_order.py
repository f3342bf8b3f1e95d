"""Application service: Delete Order use case.

Only unlocked DRAFT orders can be deleted; anything later has history
(reservations, ledger entries) and is rejected instead.
"""

from __future__ import annotations

from litdist.application._lookups import get_order
from litdist.domain.exceptions import OrderLockedError, OrderNotEditableError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.order import OrderStatus
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.service.locking import KeyedLocks, default_locks, order_key


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks | None = None) -> None:
        self._order_repo = order_repo
        self._locks = locks or default_locks()

    def handle(self, actor: Actor, order_id: int) -> None:
        actor.require(Permission.CREATE_ORDERS)
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            if order.status != OrderStatus.DRAFT:
                raise OrderNotEditableError("Can only delete orders in DRAFT status")
            if order.is_locked:
                raise OrderLockedError(f"Cannot delete locked order {order.order_number}")
            self._order_repo.delete(order_id)
