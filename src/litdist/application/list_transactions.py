"""Application service: List Transactions use case (query)."""

from __future__ import annotations

from datetime import datetime

from litdist.application.dto import TransactionDTO
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.transaction import TransactionType
from litdist.domain.service.transaction_ledger import MovementTotals, TransactionLedger


class ListTransactionsHandler:

    def __init__(self, transaction_ledger: TransactionLedger) -> None:
        self._transactions = transaction_ledger

    def handle(
        self,
        actor: Actor,
        organization_id: str | None = None,
        literature_id: str | None = None,
        order_id: int | None = None,
        type: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[TransactionDTO]:
        actor.require(Permission.VIEW_REPORTS)
        entries = self._transactions.find(
            organization_id=organization_id,
            literature_id=literature_id,
            order_id=order_id,
            type=TransactionType.parse(type) if type is not None else None,
            date_from=date_from,
            date_to=date_to,
        )
        return [TransactionDTO.from_transaction(e) for e in entries]

    def summary(self, actor: Actor, organization_id: str | None = None) -> list[MovementTotals]:
        actor.require(Permission.VIEW_REPORTS)
        return self._transactions.movement_summary(organization_id=organization_id)
