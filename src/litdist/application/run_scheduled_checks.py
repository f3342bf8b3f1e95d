"""Application services: scheduled notification checks.

Meant to be triggered from outside (cron, systemd timer); each run looks
for work, sends one notification per hit and reports the outcome.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from litdist.application.dto import CheckReport
from litdist.domain.model.order import OrderStatus
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.notifications import (
    EventType,
    NotificationDispatcher,
    notify_safely,
)

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_DAYS = 3
DEFAULT_LOW_STOCK_THRESHOLD = 10

_NO_REMINDER = {OrderStatus.COMPLETED, OrderStatus.REJECTED, OrderStatus.DELIVERED}


class SendOrderRemindersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def handle(self, older_than_days: int = DEFAULT_REMINDER_DAYS) -> CheckReport:
        now = self._clock()
        cutoff = now - timedelta(days=older_than_days)
        sent = failed = 0
        for order in self._order_repo.list_all():
            if order.status in _NO_REMINDER or order.created_at >= cutoff:
                continue
            payload = {
                "order_id": order.id,
                "order_number": order.order_number,
                "from_organization_id": order.from_organization_id,
                "to_organization_id": order.to_organization_id,
                "status": order.status.value,
                "days_since_created": (now - order.created_at).days,
                "total_amount": str(order.total_amount.amount),
            }
            if notify_safely(self._dispatcher, EventType.ORDER_REMINDER, payload):
                sent += 1
            else:
                failed += 1
        logger.info("Order reminders completed: %d sent, %d failed", sent, failed)
        return CheckReport(sent=sent, failed=failed)


class CheckLowStockHandler:

    def __init__(
        self,
        inventory_ledger: InventoryLedger,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._inventory = inventory_ledger
        self._dispatcher = dispatcher

    def handle(
        self,
        threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        organization_id: str | None = None,
    ) -> CheckReport:
        sent = failed = 0
        for record in self._inventory.low_stock(threshold, organization_id):
            payload = {
                "organization_id": record.organization_id,
                "literature_id": record.literature_id,
                "quantity": record.quantity,
                "reserved_quantity": record.reserved_quantity,
                "available_quantity": record.available_quantity,
                "threshold": threshold,
            }
            if notify_safely(self._dispatcher, EventType.LOW_STOCK, payload):
                sent += 1
            else:
                failed += 1
        logger.info("Low stock alerts completed: %d sent, %d failed", sent, failed)
        return CheckReport(sent=sent, failed=failed)
