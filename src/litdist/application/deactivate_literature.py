"""Application service: Deactivate Literature use case (soft delete).

A title that still sits on an open order stays active so the order can
complete.
"""

from __future__ import annotations

from litdist.domain.exceptions import NotFoundError, ValidationError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.order import OrderStatus
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.order_repository import OrderRepository

_CLOSED = {OrderStatus.COMPLETED, OrderStatus.REJECTED}


class DeactivateLiteratureHandler:

    def __init__(
        self,
        literature_repo: LiteratureRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._literature_repo = literature_repo
        self._order_repo = order_repo

    def handle(self, actor: Actor, literature_id: str) -> None:
        actor.require(Permission.MANAGE_LITERATURE)
        literature = self._literature_repo.get_by_id(literature_id)
        if literature is None:
            raise NotFoundError(f"Literature with ID '{literature_id}' not found")

        for order in self._order_repo.list_all():
            if order.status in _CLOSED:
                continue
            if any(item.literature_id == literature_id for item in order.items):
                raise ValidationError(
                    f"Cannot deactivate literature on open order {order.order_number}"
                )

        literature.deactivate()
        self._literature_repo.save(literature)
