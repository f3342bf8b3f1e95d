"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from litdist.domain.model.inventory import InventoryRecord
from litdist.domain.repository.inventory_repository import InventoryRepository
from litdist.infrastructure.persistence.json_file import JsonFile


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def get(self, organization_id: str, literature_id: str) -> InventoryRecord | None:
        for raw in self._file.load():
            if self._matches(raw, organization_id, literature_id):
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[InventoryRecord]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, record: InventoryRecord) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if self._matches(raw, *record.key):
                    records[i] = self._to_raw(record)
                    break
            else:
                records.append(self._to_raw(record))

    def delete(self, organization_id: str, literature_id: str) -> None:
        with self._file.update() as records:
            records[:] = [
                raw for raw in records
                if not self._matches(raw, organization_id, literature_id)
            ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _matches(raw: dict, organization_id: str, literature_id: str) -> bool:
        return raw["organization_id"] == organization_id and raw["literature_id"] == literature_id

    @staticmethod
    def _to_raw(record: InventoryRecord) -> dict:
        return {
            "organization_id": record.organization_id,
            "literature_id": record.literature_id,
            "quantity": record.quantity,
            "reserved_quantity": record.reserved_quantity,
            "updated_at": record.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryRecord:
        record = InventoryRecord(
            organization_id=raw["organization_id"],
            literature_id=raw["literature_id"],
            quantity=raw["quantity"],
            reserved_quantity=raw.get("reserved_quantity", 0),
        )
        if raw.get("updated_at"):
            record.updated_at = datetime.fromisoformat(raw["updated_at"])
        return record
