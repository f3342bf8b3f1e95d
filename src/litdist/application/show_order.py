"""Application services: Show Order / List Orders use cases (queries)."""

from __future__ import annotations

from datetime import datetime

from litdist.application._lookups import get_order
from litdist.application.dto import OrderDTO
from litdist.domain.model.order import OrderStatus
from litdist.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        return OrderDTO.from_order(get_order(self._order_repo, order_id))


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: str | None = None,
        from_organization_id: str | None = None,
        to_organization_id: str | None = None,
        created_by: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[OrderDTO]:
        """Return matching orders, newest first."""
        wanted = OrderStatus.parse(status) if status is not None else None
        result = []
        for order in self._order_repo.list_all():
            if wanted is not None and order.status != wanted:
                continue
            if from_organization_id is not None and order.from_organization_id != from_organization_id:
                continue
            if to_organization_id is not None and order.to_organization_id != to_organization_id:
                continue
            if created_by is not None and order.created_by != created_by:
                continue
            if date_from is not None and order.created_at < date_from:
                continue
            if date_to is not None and order.created_at > date_to:
                continue
            result.append(order)
        result.sort(key=lambda o: o.created_at, reverse=True)
        return [OrderDTO.from_order(order) for order in result]
