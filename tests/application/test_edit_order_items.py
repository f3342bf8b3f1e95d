"""Tests for adding, updating and removing order lines."""

import pytest

from litdist.application.dto import OrderItemSpec
from litdist.application.create_order import CreateOrderHandler
from litdist.application.edit_order_items import (
    AddOrderItemHandler,
    RemoveOrderItemHandler,
    UpdateOrderItemHandler,
)
from litdist.domain.exceptions import OrderLockedError, OrderNotEditableError
from litdist.domain.model.actor import Actor, UserRole
from litdist.domain.model.order import OrderStatus
from tests.fakes import (
    FakeLiteratureRepository,
    FakeOrderRepository,
    FakeOrganizationRepository,
    sample_literature,
    sample_organizations,
)

GROUP_USER = Actor("gena", UserRole.GROUP, "4")


def _setup():
    order_repo = FakeOrderRepository()
    literature_repo = FakeLiteratureRepository(sample_literature())
    create = CreateOrderHandler(order_repo, FakeOrganizationRepository(sample_organizations()), literature_repo)
    dto = create.handle(GROUP_USER, "4", "3", [OrderItemSpec("A", 1)])
    return dto.id, order_repo, literature_repo


class TestEditItems:

    def test_add_recomputes_total(self):
        order_id, order_repo, literature_repo = _setup()
        dto = AddOrderItemHandler(order_repo, literature_repo).handle(GROUP_USER, order_id, "C", 5)
        assert dto.total == "600.00 RUB"

    def test_add_with_price_override(self):
        order_id, order_repo, literature_repo = _setup()
        dto = AddOrderItemHandler(order_repo, literature_repo).handle(
            GROUP_USER, order_id, "C", 5, unit_price="10.00"
        )
        assert dto.total == "550.00 RUB"

    def test_update_quantity(self):
        order_id, order_repo, _ = _setup()
        dto = UpdateOrderItemHandler(order_repo).handle(GROUP_USER, order_id, "A", 3)
        assert dto.total == "1500.00 RUB"

    def test_remove(self):
        order_id, order_repo, literature_repo = _setup()
        AddOrderItemHandler(order_repo, literature_repo).handle(GROUP_USER, order_id, "B", 1)
        dto = RemoveOrderItemHandler(order_repo).handle(GROUP_USER, order_id, "A")
        assert [i.literature_id for i in dto.items] == ["B"]
        assert dto.total == "1000.00 RUB"

    def test_approved_order_is_frozen(self):
        order_id, order_repo, literature_repo = _setup()
        order_repo.get_by_id(order_id).status = OrderStatus.APPROVED
        with pytest.raises(OrderNotEditableError):
            AddOrderItemHandler(order_repo, literature_repo).handle(GROUP_USER, order_id, "B", 1)

    def test_locked_by_other(self):
        order_id, order_repo, _ = _setup()
        order_repo.get_by_id(order_id).lock("olga")
        with pytest.raises(OrderLockedError):
            UpdateOrderItemHandler(order_repo).handle(GROUP_USER, order_id, "A", 2)

