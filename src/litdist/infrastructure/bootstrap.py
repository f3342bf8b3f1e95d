"""Composition root: builds the JSON repositories and services for a data directory.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.notifications import NotificationDispatcher
from litdist.domain.service.order_state_machine import OrderStateMachine
from litdist.domain.service.transaction_ledger import TransactionLedger
from litdist.infrastructure.notifications.dispatchers import (
    FanOutDispatcher,
    JsonNotificationOutbox,
    LoggingDispatcher,
)
from litdist.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from litdist.infrastructure.persistence.json_literature_repository import (
    JsonLiteratureRepository,
)
from litdist.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from litdist.infrastructure.persistence.json_organization_repository import (
    JsonOrganizationRepository,
)
from litdist.infrastructure.persistence.json_transaction_repository import (
    JsonTransactionRepository,
)

DEFAULT_DATA_DIR = Path("data")


def organization_repository(data_dir: Path) -> JsonOrganizationRepository:
    return JsonOrganizationRepository(data_dir / "organizations.json")


def literature_repository(data_dir: Path) -> JsonLiteratureRepository:
    return JsonLiteratureRepository(data_dir / "literature.json")


def inventory_repository(data_dir: Path) -> JsonInventoryRepository:
    return JsonInventoryRepository(data_dir / "inventory.json")


def order_repository(data_dir: Path) -> JsonOrderRepository:
    return JsonOrderRepository(data_dir / "orders.json")


def transaction_repository(data_dir: Path) -> JsonTransactionRepository:
    return JsonTransactionRepository(data_dir / "transactions.json")


def notification_outbox(data_dir: Path) -> JsonNotificationOutbox:
    return JsonNotificationOutbox(data_dir / "notifications.json")


def dispatcher(data_dir: Path) -> NotificationDispatcher:
    return FanOutDispatcher(LoggingDispatcher(), notification_outbox(data_dir))


def inventory_ledger(data_dir: Path) -> InventoryLedger:
    return InventoryLedger(inventory_repository(data_dir))


def transaction_ledger(data_dir: Path) -> TransactionLedger:
    return TransactionLedger(transaction_repository(data_dir))


def order_state_machine(data_dir: Path) -> OrderStateMachine:
    return OrderStateMachine(
        order_repo=order_repository(data_dir),
        inventory_ledger=inventory_ledger(data_dir),
        transaction_ledger=transaction_ledger(data_dir),
        dispatcher=dispatcher(data_dir),
    )
