"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from litdist.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Raises ValidationError if another order already uses the same
        order number.
        """

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order together with its line items."""

    def get_by_number(self, order_number: str) -> Order | None:
        for order in self.list_all():
            if order.order_number == order_number:
                return order
        return None

    def numbers_with_prefix(self, prefix: str) -> list[str]:
        return [o.order_number for o in self.list_all() if o.order_number.startswith(prefix)]
