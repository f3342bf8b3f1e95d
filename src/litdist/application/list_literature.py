"""Application service: List Literature use case (query)."""

from __future__ import annotations

from litdist.domain.model.literature import Literature
from litdist.domain.repository.literature_repository import LiteratureRepository


class ListLiteratureHandler:

    def __init__(self, literature_repo: LiteratureRepository) -> None:
        self._literature_repo = literature_repo

    def handle(
        self,
        category: str | None = None,
        search: str | None = None,
        include_inactive: bool = False,
    ) -> list[Literature]:
        result = []
        for literature in self._literature_repo.list_all():
            if not include_inactive and not literature.is_active:
                continue
            if category is not None and literature.category.lower() != category.lower():
                continue
            if search is not None:
                needle = search.lower()
                haystack = f"{literature.title} {literature.description}".lower()
                if needle not in haystack:
                    continue
            result.append(literature)
        return sorted(result, key=lambda lit: lit.title.lower())
