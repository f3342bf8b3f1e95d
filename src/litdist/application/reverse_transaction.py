"""Application service: Reverse Transaction use case.

Ledger entries are never deleted. Cancelling an adjustment appends an
offsetting entry and undoes its effect on stock; both happen together or
not at all.
"""

from __future__ import annotations

from litdist.application.dto import TransactionDTO
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.service.inventory_ledger import InventoryLedger
from litdist.domain.service.transaction_ledger import TransactionLedger


class ReverseTransactionHandler:

    def __init__(
        self,
        inventory_ledger: InventoryLedger,
        transaction_ledger: TransactionLedger,
    ) -> None:
        self._inventory = inventory_ledger
        self._transactions = transaction_ledger

    def handle(self, actor: Actor, transaction_id: int, notes: str | None = None) -> TransactionDTO:
        actor.require(Permission.MANAGE_INVENTORY)
        original = self._transactions.check_reversible(transaction_id)
        actor.require_organization(original.organization_id)

        key = (original.organization_id, original.literature_id)
        with self._inventory.atomic([key]):
            self._inventory.adjust(*key, -original.signed_quantity)
            reversal = self._transactions.reverse(transaction_id, notes=notes)
        return TransactionDTO.from_transaction(reversal)
