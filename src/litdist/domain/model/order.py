"""Order aggregate: line items, status rules and the editing lock.

The Order is an aggregate root that owns its line items. Status rules,
line-item editing rules and the editing lock are enforced here; inventory
and ledger side effects of a status change are coordinated by the
``OrderStateMachine`` domain service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from litdist.domain.exceptions import (
    AlreadyLockedError,
    InvalidStatusTransitionError,
    NotFoundError,
    OrderLockedError,
    OrderNotEditableError,
    PermissionDeniedError,
    ValidationError,
)
from litdist.domain.model.actor import Actor
from litdist.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    IN_ASSEMBLY = "IN_ASSEMBLY"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {raw!r}") from exc


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset({OrderStatus.PENDING}),
    OrderStatus.PENDING: frozenset({OrderStatus.APPROVED, OrderStatus.REJECTED}),
    OrderStatus.APPROVED: frozenset({OrderStatus.IN_ASSEMBLY, OrderStatus.REJECTED}),
    OrderStatus.IN_ASSEMBLY: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.REJECTED: frozenset(),
}

EDITABLE_STATUSES = frozenset({OrderStatus.DRAFT, OrderStatus.PENDING})
LOCKABLE_STATUSES = frozenset(
    {OrderStatus.DRAFT, OrderStatus.PENDING, OrderStatus.APPROVED}
)

MAX_LINE_ITEMS = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderItem:
    """One title on an order, priced at the moment it was added.

    ``unit_price`` is a snapshot and never follows later catalog changes.
    """

    literature_id: str
    title: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders between two organizations.

    ``from_organization_id`` is the ordering unit that receives the goods,
    ``to_organization_id`` is the supplier whose stock is reserved and
    shipped. Use ``Order.create()`` for new orders; ``__init__`` stays
    simple so repositories can reconstitute persisted orders.
    """

    id: int | None
    order_number: str
    from_organization_id: str
    to_organization_id: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.DRAFT
    created_by: str | None = None
    locked_by: str | None = None
    locked_at: datetime | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        from_organization_id: str,
        to_organization_id: str,
        items: list[OrderItem],
        created_by: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new DRAFT order, enforcing all invariants."""
        if from_organization_id == to_organization_id:
            raise ValidationError("An organization cannot order from itself")
        if not items:
            raise ValidationError("Order must contain at least one item")
        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        seen: set[str] = set()
        for item in items:
            if item.literature_id in seen:
                raise ValidationError(f"Item '{item.title}' already exists in order")
            seen.add(item.literature_id)

        return Order(
            id=None,
            order_number=order_number,
            from_organization_id=from_organization_id,
            to_organization_id=to_organization_id,
            items=list(items),
            created_by=created_by,
            notes=notes,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency) if self.items else Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def is_locked(self) -> bool:
        return self.locked_by is not None

    def is_locked_for(self, user_id: str) -> bool:
        """True if someone other than *user_id* holds the lock."""
        return self.locked_by is not None and self.locked_by != user_id

    # --- State transitions ----------------------------------------------------

    def check_transition(self, target: OrderStatus, actor: Actor | None = None) -> None:
        """Raise unless *actor* may move the order to *target* right now."""
        if actor is not None:
            self._ensure_not_locked_for(actor)
        if target not in TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.status.value, target.value)

    def transition_to(self, target: OrderStatus, actor: Actor) -> OrderStatus:
        """Move to *target* and return the previous status.

        Inventory and ledger effects are the state machine's job.
        """
        self.check_transition(target, actor)
        previous = self.status
        self.status = target
        self._touch()
        return previous

    # --- Line items -----------------------------------------------------------

    def ensure_editable(self, actor: Actor) -> None:
        if self.status not in EDITABLE_STATUSES:
            raise OrderNotEditableError(
                f"Cannot modify order with status {self.status.value}"
            )
        self._ensure_not_locked_for(actor)

    def add_item(self, item: OrderItem, actor: Actor) -> None:
        self.ensure_editable(actor)
        if any(line.literature_id == item.literature_id for line in self.items):
            raise ValidationError(f"Item '{item.title}' already exists in order")
        if len(self.items) >= MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
        self.items.append(item)
        self._touch()

    def update_item_quantity(self, literature_id: str, quantity: Quantity, actor: Actor) -> OrderItem:
        self.ensure_editable(actor)
        item = self.find_item(literature_id)
        item.quantity = quantity
        self._touch()
        return item

    def remove_item(self, literature_id: str, actor: Actor) -> None:
        self.ensure_editable(actor)
        item = self.find_item(literature_id)
        if len(self.items) == 1:
            raise ValidationError("Order must contain at least one item")
        self.items.remove(item)
        self._touch()

    def find_item(self, literature_id: str) -> OrderItem:
        for item in self.items:
            if item.literature_id == literature_id:
                return item
        raise NotFoundError(
            f"Literature '{literature_id}' not found in order {self.order_number}"
        )

    # --- Editing lock ---------------------------------------------------------

    def lock(self, user_id: str) -> None:
        if self.locked_by == user_id:
            return
        if self.locked_by is not None:
            raise AlreadyLockedError(
                f"Order {self.order_number} is already locked by '{self.locked_by}'"
            )
        if self.status not in LOCKABLE_STATUSES:
            raise ValidationError(f"Cannot lock order with status {self.status.value}")
        self.locked_by = user_id
        self.locked_at = _now()
        self._touch()

    def unlock(self, actor: Actor) -> None:
        if self.locked_by is None:
            raise ValidationError(f"Order {self.order_number} is not locked")
        if self.locked_by != actor.user_id and not actor.is_elevated:
            raise PermissionDeniedError(
                "Only the user who locked the order or an admin can unlock it"
            )
        self.locked_by = None
        self.locked_at = None
        self._touch()

    # --- Internal helpers -----------------------------------------------------

    def _ensure_not_locked_for(self, actor: Actor) -> None:
        if self.is_locked_for(actor.user_id):
            raise OrderLockedError(
                f"Order {self.order_number} is locked by '{self.locked_by}'"
            )

    def _touch(self) -> None:
        self.updated_at = _now()
