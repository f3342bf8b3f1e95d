"""Abstract repository for Literature aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from litdist.domain.model.literature import Literature


class LiteratureRepository(ABC):

    @abstractmethod
    def get_by_id(self, literature_id: str) -> Literature | None:
        """Return a title by its ID, or None if not found."""

    @abstractmethod
    def get_by_title(self, title: str) -> Literature | None:
        """Return a title by its exact (case-insensitive) name, or None."""

    @abstractmethod
    def list_all(self) -> list[Literature]:
        """Return every title in the catalog."""

    @abstractmethod
    def save(self, literature: Literature) -> None:
        """Persist a new or updated title."""
