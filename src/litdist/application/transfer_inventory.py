"""Application service: Transfer Inventory use case.

Moves on-hand stock between two organizations outside of an order and
records the OUTGOING / INCOMING pair.
"""

from __future__ import annotations

from litdist.application._lookups import get_active_literature, get_organization
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.model.transaction import TransactionType
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.organization_repository import OrganizationRepository
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.transaction_ledger import TransactionLedger


class TransferInventoryHandler:

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
        from_organization_id: str,
        to_organization_id: str,
        literature_id: str,
        quantity: int,
        notes: str | None = None,
    ) -> tuple[InventoryRecord, InventoryRecord]:
        actor.require(Permission.MANAGE_INVENTORY)
        actor.require_organization(from_organization_id)
        get_organization(self._organization_repo, from_organization_id)
        get_organization(self._organization_repo, to_organization_id)
        literature = get_active_literature(self._literature_repo, literature_id)

        keys = [(from_organization_id, literature_id), (to_organization_id, literature_id)]
        with self._inventory.atomic(keys):
            source, target = self._inventory.transfer(
                from_organization_id, to_organization_id, literature_id, quantity
            )
            self._transactions.append([
                self._transactions.prepare(
                    TransactionType.OUTGOING,
                    from_organization_id,
                    literature_id,
                    quantity,
                    counterparty_organization_id=to_organization_id,
                    unit_price=literature.price,
                    notes=notes or "Transfer",
                ),
                self._transactions.prepare(
                    TransactionType.INCOMING,
                    to_organization_id,
                    literature_id,
                    quantity,
                    counterparty_organization_id=from_organization_id,
                    unit_price=literature.price,
                    notes=notes or "Transfer",
                ),
            ])
        return source, target
