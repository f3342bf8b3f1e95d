"""Application service: Add Literature use case."""

from __future__ import annotations

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.literature import Literature
from litdist.domain.model.value_objects import Money
from litdist.domain.repository.literature_repository import LiteratureRepository


class AddLiteratureHandler:

    def __init__(self, literature_repo: LiteratureRepository) -> None:
        self._literature_repo = literature_repo

    def handle(
        self,
        actor: Actor,
        title: str,
        price: str,
        description: str = "",
        category: str = "",
    ) -> Literature:
        """Add a new title to the catalog."""
        actor.require(Permission.MANAGE_LITERATURE)
        if not title or not title.strip():
            raise ValidationError("Literature title is required")

        existing = self._literature_repo.get_by_title(title.strip())
        if existing is not None:
            raise ValidationError(f"Literature '{title}' already exists")

        # Auto-assign ID based on existing numeric IDs
        numeric_ids = [int(lit.id) for lit in self._literature_repo.list_all() if lit.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        literature = Literature(
            id=next_id,
            title=title.strip(),
            price=Money.of(price),
            description=description,
            category=category.strip(),
        )
        self._literature_repo.save(literature)
        return literature
