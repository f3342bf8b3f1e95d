"""JSON-file-backed implementation of LiteratureRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from litdist.domain.model.literature import Literature
from litdist.domain.model.value_objects import DEFAULT_CURRENCY, Money
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.infrastructure.persistence.json_file import JsonFile


class JsonLiteratureRepository(LiteratureRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- LiteratureRepository interface ---------------------------------------

    def get_by_id(self, literature_id: str) -> Literature | None:
        return self._load().get(literature_id)

    def get_by_title(self, title: str) -> Literature | None:
        for literature in self._load().values():
            if literature.title.lower() == title.lower():
                return literature
        return None

    def list_all(self) -> list[Literature]:
        return list(self._load().values())

    def save(self, literature: Literature) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == literature.id:
                    records[i] = self._to_raw(literature)
                    break
            else:
                records.append(self._to_raw(literature))

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Literature]:
        return {raw["id"]: self._to_domain(raw) for raw in self._file.load()}

    @staticmethod
    def _to_raw(literature: Literature) -> dict:
        return {
            "id": literature.id,
            "title": literature.title,
            "description": literature.description,
            "category": literature.category,
            "price": str(literature.price.amount),
            "currency": literature.price.currency,
            "is_active": literature.is_active,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Literature:
        return Literature(
            id=raw["id"],
            title=raw["title"],
            description=raw.get("description", ""),
            category=raw.get("category", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", DEFAULT_CURRENCY)),
            is_active=raw.get("is_active", True),
        )
