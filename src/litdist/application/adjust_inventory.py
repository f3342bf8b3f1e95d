"""Application service: Adjust Inventory use case.

Corrects on-hand stock after a physical count and records an ADJUSTMENT
entry carrying the reason.
"""

from __future__ import annotations

from litdist.application._lookups import get_active_literature, get_organization
from litdist.domain.exceptions import ValidationError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.model.transaction import TransactionType
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.organization_repository import OrganizationRepository
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.transaction_ledger import TransactionLedger


class AdjustInventoryHandler:

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        literature_repo: LiteratureRepository,
        inventory_ledger: InventoryLedger,
        transaction_ledger: TransactionLedger,
    ) -> None:
        self._organization_repo = organization_repo
        self._literature_repo = literature_repo
        self._inventory = inventory_ledger
        self._transactions = transaction_ledger

    def handle(
        self,
        actor: Actor,
        organization_id: str,
        literature_id: str,
        delta: int,
        reason: str,
        notes: str | None = None,
    ) -> InventoryRecord:
        actor.require(Permission.MANAGE_INVENTORY)
        actor.require_organization(organization_id)
        if not reason or not reason.strip():
            raise ValidationError("Adjustment reason is required")
        get_organization(self._organization_repo, organization_id)
        literature = get_active_literature(self._literature_repo, literature_id)

        with self._inventory.atomic([(organization_id, literature_id)]):
            record = self._inventory.adjust(organization_id, literature_id, delta)
            self._transactions.record(
                TransactionType.ADJUSTMENT,
                organization_id,
                literature_id,
                abs(delta),
                unit_price=literature.price,
                decrease=delta < 0,
                notes=f"{reason.strip()}: {notes}" if notes else reason.strip(),
            )
        return record
