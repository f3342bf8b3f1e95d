"""Application service: Update Literature use case."""

from __future__ import annotations

from litdist.domain.exceptions import NotFoundError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.literature import Literature
from litdist.domain.model.value_objects import Money
from litdist.domain.repository.literature_repository import LiteratureRepository


class UpdateLiteratureHandler:

    def __init__(self, literature_repo: LiteratureRepository) -> None:
        self._literature_repo = literature_repo

    def handle(
        self,
        actor: Actor,
        literature_id: str,
        price: str | None = None,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> Literature:
        """Update catalog fields.

        Orders already holding this title keep the price they captured.
        """
        actor.require(Permission.MANAGE_LITERATURE)
        literature = self._literature_repo.get_by_id(literature_id)
        if literature is None:
            raise NotFoundError(f"Literature with ID '{literature_id}' not found")

        if price is not None:
            literature.update_price(Money.of(price))
        literature.update_details(title=title, description=description, category=category)
        self._literature_repo.save(literature)
        return literature
