"""Abstract repository for InventoryRecord aggregate.

Records are unique per (organization_id, literature_id).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from litdist.domain.model.inventory import InventoryRecord


class InventoryRepository(ABC):

    @abstractmethod
    def get(self, organization_id: str, literature_id: str) -> InventoryRecord | None:
        """Return the record for an (organization, title) pair, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryRecord]:
        """Return every inventory record."""

    @abstractmethod
    def save(self, record: InventoryRecord) -> None:
        """Insert or replace the record with the same key."""

    @abstractmethod
    def delete(self, organization_id: str, literature_id: str) -> None:
        """Remove the record for an (organization, title) pair if present."""

    def list_by_organization(self, organization_id: str) -> list[InventoryRecord]:
        return [r for r in self.list_all() if r.organization_id == organization_id]

    def list_by_literature(self, literature_id: str) -> list[InventoryRecord]:
        return [r for r in self.list_all() if r.literature_id == literature_id]
