"""Application services: manual Reserve / Release Inventory use cases.

Order approval reserves stock on its own; these exist for operators who
need to hold or free stock by hand.
"""

from __future__ import annotations

from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.service.inventory_ledger import InventoryLedger


class ReserveInventoryHandler:

    def __init__(self, inventory_ledger: InventoryLedger) -> None:
        self._inventory = inventory_ledger

    def handle(
        self, actor: Actor, organization_id: str, literature_id: str, quantity: int
    ) -> InventoryRecord:
        actor.require(Permission.MANAGE_INVENTORY)
        actor.require_organization(organization_id)
        return self._inventory.reserve(organization_id, literature_id, quantity)


class ReleaseInventoryHandler:

    def __init__(self, inventory_ledger: InventoryLedger) -> None:
        self._inventory = inventory_ledger

    def handle(
        self,
        actor: Actor,
        organization_id: str,
        literature_id: str,
        quantity: int,
        strict: bool = False,
    ) -> int:
        """Return the quantity actually released."""
        actor.require(Permission.MANAGE_INVENTORY)
        actor.require_organization(organization_id)
        return self._inventory.release(organization_id, literature_id, quantity, strict=strict)
