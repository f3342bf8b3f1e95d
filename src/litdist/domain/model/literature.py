"""Literature aggregate.

Catalog titles live independently of orders. Their price may change at any
time; orders keep the price that was current when the line was added.
"""

from __future__ import annotations

from dataclasses import dataclass

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.value_objects import Money


@dataclass
class Literature:
    """A title in the catalog."""

    id: str
    title: str
    price: Money
    description: str = ""
    category: str = ""
    is_active: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing orders keep their snapshot; only new lines see it.
        """
        self.price = new_price

    def update_details(
        self,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> None:
        if title is not None:
            if not title.strip():
                raise ValidationError("Literature title is required")
            self.title = title.strip()
        if description is not None:
            self.description = description
        if category is not None:
            self.category = category.strip()

    def deactivate(self) -> None:
        self.is_active = False
