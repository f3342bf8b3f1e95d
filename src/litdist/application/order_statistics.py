"""Application service: Order Statistics use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from litdist.domain.model.order import OrderStatus
from litdist.domain.model.value_objects import Money
from litdist.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class StatusStatistics:
    status: str
    count: int
    total_amount: str


class OrderStatisticsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, organization_id: str | None = None) -> list[StatusStatistics]:
        """Count and value per status, for orders on either side of *organization_id*."""
        orders = [
            o
            for o in self._order_repo.list_all()
            if organization_id is None
            or organization_id in (o.from_organization_id, o.to_organization_id)
        ]
        result = []
        for status in OrderStatus:
            matching = [o for o in orders if o.status == status]
            if not matching:
                continue
            total = Money.zero()
            for order in matching:
                total = total + order.total_amount
            result.append(
                StatusStatistics(status=status.value, count=len(matching), total_amount=str(total))
            )
        return result
