"""Application services: Lock / Unlock Order use cases.

The lock is an application-level single-editor mutex: while one operator
holds it, nobody else can edit the order or move its status.
"""

from __future__ import annotations

import logging

from litdist.application._lookups import get_order
from litdist.application.dto import OrderDTO
from litdist.domain.model.actor import Actor
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.service.locking import KeyedLocks, default_locks, order_key

logger = logging.getLogger(__name__)


class LockOrderHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks | None = None) -> None:
        self._order_repo = order_repo
        self._locks = locks or default_locks()

    def handle(self, actor: Actor, order_id: int) -> OrderDTO:
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            order.lock(actor.user_id)
            self._order_repo.save(order)
        logger.info("Order %s locked by %s", order.order_number, actor.user_id)
        return OrderDTO.from_order(order)


class UnlockOrderHandler:

    def __init__(self, order_repo: OrderRepository, locks: KeyedLocks | None = None) -> None:
        self._order_repo = order_repo
        self._locks = locks or default_locks()

    def handle(self, actor: Actor, order_id: int) -> OrderDTO:
        with self._locks.acquire([order_key(order_id)]):
            order = get_order(self._order_repo, order_id)
            order.unlock(actor)
            self._order_repo.save(order)
        logger.info("Order %s unlocked by %s", order.order_number, actor.user_id)
        return OrderDTO.from_order(order)
