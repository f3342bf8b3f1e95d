"""Application service: Change Order Status use case.

Checks who may request the transition and hands over to the
OrderStateMachine domain service, which applies inventory and ledger
effects.
"""

from __future__ import annotations

from litdist.application.dto import OrderDTO
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.order import OrderStatus
from litdist.domain.service.order_state_machine import OrderStateMachine

# Submitting a draft is the ordering unit's call; every later step is the
# supplier's.
_REQUIRED_PERMISSION: dict[OrderStatus, Permission] = {
    OrderStatus.PENDING: Permission.CREATE_ORDERS,
}


class ChangeOrderStatusHandler:

    def __init__(self, state_machine: OrderStateMachine) -> None:
        self._state_machine = state_machine

    def handle(
        self,
        actor: Actor,
        order_id: int,
        status: str,
        notes: str | None = None,
    ) -> OrderDTO:
        target = OrderStatus.parse(status)
        actor.require(_REQUIRED_PERMISSION.get(target, Permission.PROCESS_ORDERS))
        order = self._state_machine.transition(order_id, target, actor, notes=notes)
        return OrderDTO.from_order(order)
