"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model: checks
that the ordering unit may order from the supplier, resolves each title to
its current price (snapshot) and lets the Order aggregate validate the rest.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from litdist.application._lookups import get_active_literature
from litdist.application.dto import OrderDTO, OrderItemSpec
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.order import Order, OrderItem
from litdist.domain.model.value_objects import Quantity
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.repository.organization_repository import OrganizationRepository
from litdist.domain.service.notifications import (
    EventType,
    NotificationDispatcher,
    notify_safely,
)

logger = logging.getLogger(__name__)


def generate_order_number(order_repo: OrderRepository, today: datetime) -> str:
    """Return ``ORD-YYYYMMDD-NNNN`` with the next sequence for *today*."""
    prefix = f"ORD-{today:%Y%m%d}"
    sequence = 0
    for number in order_repo.numbers_with_prefix(prefix):
        tail = number.rsplit("-", 1)[-1]
        if tail.isdigit():
            sequence = max(sequence, int(tail))
    return f"{prefix}-{sequence + 1:04d}"


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        organization_repo: OrganizationRepository,
        literature_repo: LiteratureRepository,
        dispatcher: NotificationDispatcher | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._organization_repo = organization_repo
        self._literature_repo = literature_repo
        self._dispatcher = dispatcher
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def handle(
        self,
        actor: Actor,
        from_organization_id: str,
        to_organization_id: str,
        item_specs: list[OrderItemSpec],
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new DRAFT order.

        Steps:
        1. Check permissions and the organizational hierarchy.
        2. Resolve each title and snapshot its *current* price.
        3. Let the Order aggregate validate all business rules.
        4. Persist, notify and return a DTO.
        """
        actor.require(Permission.CREATE_ORDERS)
        actor.require_organization(from_organization_id)
        self._organization_repo.tree().validate_supplier(
            from_organization_id, to_organization_id
        )

        line_items: list[OrderItem] = []
        for spec in item_specs:
            literature = get_active_literature(self._literature_repo, spec.literature_id)
            line_items.append(
                OrderItem(
                    literature_id=literature.id,
                    title=literature.title,
                    quantity=Quantity(spec.quantity),
                    unit_price=literature.price,  # <-- price snapshot
                )
            )

        order = Order.create(
            order_number=generate_order_number(self._order_repo, self._clock()),
            from_organization_id=from_organization_id,
            to_organization_id=to_organization_id,
            items=line_items,
            created_by=actor.user_id,
            notes=notes,
        )
        self._order_repo.save(order)
        logger.info("Order %s created by %s", order.order_number, actor.user_id)

        notify_safely(
            self._dispatcher,
            EventType.ORDER_CREATED,
            {
                "order_id": order.id,
                "order_number": order.order_number,
                "from_organization_id": order.from_organization_id,
                "to_organization_id": order.to_organization_id,
                "total_amount": str(order.total_amount.amount),
                "created_by": actor.user_id,
            },
        )
        return OrderDTO.from_order(order)
