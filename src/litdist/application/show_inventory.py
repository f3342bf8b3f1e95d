"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from litdist.application.dto import InventoryLineDTO
from litdist.domain.repository.inventory_repository import InventoryRepository


class ShowInventoryHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(
        self,
        organization_id: str | None = None,
        literature_id: str | None = None,
    ) -> list[InventoryLineDTO]:
        if organization_id is not None:
            records = self._inventory_repo.list_by_organization(organization_id)
        elif literature_id is not None:
            records = self._inventory_repo.list_by_literature(literature_id)
        else:
            records = self._inventory_repo.list_all()
        if literature_id is not None:
            records = [r for r in records if r.literature_id == literature_id]
        return [
            InventoryLineDTO.from_record(record)
            for record in sorted(records, key=lambda r: r.key)
        ]
