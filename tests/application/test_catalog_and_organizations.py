"""Tests for organization and literature management use cases."""

import pytest

from litdist.application.add_literature import AddLiteratureHandler
from litdist.application.create_organization import CreateOrganizationHandler
from litdist.application.deactivate_literature import DeactivateLiteratureHandler
from litdist.application.deactivate_organization import DeactivateOrganizationHandler
from litdist.application.list_literature import ListLiteratureHandler
from litdist.application.show_organization_tree import ShowOrganizationTreeHandler
from litdist.application.update_literature import UpdateLiteratureHandler
from litdist.application.update_organization import UpdateOrganizationHandler
from litdist.domain.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from litdist.domain.model.actor import Actor, UserRole
from litdist.domain.model.order import Order, OrderItem
from litdist.domain.model.organization import OrganizationType
from litdist.domain.model.value_objects import Money, Quantity
from tests.fakes import (
    FakeLiteratureRepository,
    FakeOrderRepository,
    FakeOrganizationRepository,
    sample_literature,
    sample_organizations,
)

ADMIN = Actor("root", UserRole.ADMIN)
REGION_USER = Actor("rita", UserRole.REGION, "1")


class TestOrganizations:

    def test_create_below_parent(self):
        repo = FakeOrganizationRepository(sample_organizations())
        org = CreateOrganizationHandler(repo).handle(ADMIN, "Dawn Group", "group", parent_id="3")
        assert org.id == "5"
        assert org.type == OrganizationType.GROUP
        assert repo.get_by_id("5").parent_id == "3"

    def test_first_organization_gets_id_1(self):
        org = CreateOrganizationHandler(FakeOrganizationRepository()).handle(ADMIN, "Root", "REGION")
        assert org.id == "1"

    def test_invalid_hierarchy(self):
        repo = FakeOrganizationRepository(sample_organizations())
        with pytest.raises(ValidationError, match="Invalid organization hierarchy"):
            CreateOrganizationHandler(repo).handle(ADMIN, "Bad", "GROUP", parent_id="1")
        assert len(repo.list_all()) == 4

    def test_only_admin_manages_organizations(self):
        repo = FakeOrganizationRepository(sample_organizations())
        with pytest.raises(PermissionDeniedError):
            CreateOrganizationHandler(repo).handle(REGION_USER, "X", "LOCALITY", parent_id="1")

    def test_move_below_descendant_rejected(self):
        repo = FakeOrganizationRepository(sample_organizations())
        with pytest.raises(ValidationError):
            UpdateOrganizationHandler(repo).handle(ADMIN, "3", parent_id="4")
        assert repo.get_by_id("3").parent_id == "1"

    def test_rename_and_move(self):
        repo = FakeOrganizationRepository(sample_organizations())
        org = UpdateOrganizationHandler(repo).handle(ADMIN, "3", name="Town", parent_id="2")
        assert (org.name, org.parent_id) == ("Town", "2")

    def test_detach_from_parent(self):
        repo = FakeOrganizationRepository(sample_organizations())
        org = UpdateOrganizationHandler(repo).handle(ADMIN, "4", parent_id=None)
        assert org.parent_id is None

    def test_deactivate_with_active_children_rejected(self):
        repo = FakeOrganizationRepository(sample_organizations())
        with pytest.raises(ValidationError, match="active child"):
            DeactivateOrganizationHandler(repo).handle(ADMIN, "3")
        DeactivateOrganizationHandler(repo).handle(ADMIN, "4")
        DeactivateOrganizationHandler(repo).handle(ADMIN, "3")
        assert not repo.get_by_id("3").is_active

    def test_tree(self):
        repo = FakeOrganizationRepository(sample_organizations())
        dto = ShowOrganizationTreeHandler(repo).handle("3")
        assert [o.id for o in dto.ancestors] == ["1"]
        assert [o.id for o in dto.children] == ["4"]


class TestLiterature:

    def test_add(self):
        repo = FakeLiteratureRepository(sample_literature())
        lit = AddLiteratureHandler(repo).handle(REGION_USER, " Step Guide ", "350", category="books")
        assert lit.title == "Step Guide"
        assert lit.price == Money.of("350")
        assert repo.get_by_title("step guide") is lit

    def test_first_title_gets_id_1(self):
        lit = AddLiteratureHandler(FakeLiteratureRepository()).handle(REGION_USER, "First", "10")
        assert lit.id == "1"

    def test_duplicate_title_rejected(self):
        repo = FakeLiteratureRepository(sample_literature())
        with pytest.raises(ValidationError, match="already exists"):
            AddLiteratureHandler(repo).handle(REGION_USER, "basic text", "1")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            AddLiteratureHandler(FakeLiteratureRepository()).handle(REGION_USER, "X", "-1")

    def test_update_price(self):
        repo = FakeLiteratureRepository(sample_literature())
        lit = UpdateLiteratureHandler(repo).handle(REGION_USER, "A", price="550.00")
        assert lit.price == Money.of("550.00")

    def test_update_unknown(self):
        with pytest.raises(NotFoundError):
            UpdateLiteratureHandler(FakeLiteratureRepository()).handle(REGION_USER, "Z", price="1")

    def test_locality_cannot_edit_catalog(self):
        repo = FakeLiteratureRepository(sample_literature())
        with pytest.raises(PermissionDeniedError):
            UpdateLiteratureHandler(repo).handle(Actor("l", UserRole.LOCALITY, "3"), "A", price="1")

    def test_deactivate_blocked_by_open_order(self):
        literature_repo = FakeLiteratureRepository(sample_literature())
        order_repo = FakeOrderRepository()
        item = OrderItem("A", "Basic Text", Quantity(1), Money.of("500"))
        order_repo.save(Order.create("ORD-20250301-0001", "4", "3", [item]))
        handler = DeactivateLiteratureHandler(literature_repo, order_repo)

        with pytest.raises(ValidationError, match="open order"):
            handler.handle(REGION_USER, "A")
        handler.handle(REGION_USER, "B")
        assert not literature_repo.get_by_id("B").is_active

    def test_list_filters(self):
        repo = FakeLiteratureRepository(sample_literature())
        repo.get_by_id("B").deactivate()
        handler = ListLiteratureHandler(repo)
        assert [lit.id for lit in handler.handle()] == ["A", "C"]
        assert [lit.id for lit in handler.handle(category="PAMPHLETS")] == ["C"]
        assert [lit.id for lit in handler.handle(search="medit", include_inactive=True)] == ["B"]
