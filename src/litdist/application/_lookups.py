"""Shared lookups that turn ids into entities or raise NotFoundError."""

from __future__ import annotations

from litdist.domain.exceptions import NotFoundError, ValidationError
from litdist.domain.model.literature import Literature
from litdist.domain.model.order import Order
from litdist.domain.model.organization import Organization
from litdist.domain.repository.literature_repository import LiteratureRepository
from litdist.domain.repository.order_repository import OrderRepository
from litdist.domain.repository.organization_repository import OrganizationRepository


def get_organization(repo: OrganizationRepository, org_id: str) -> Organization:
    organization = repo.get_by_id(org_id)
    if organization is None:
        raise NotFoundError(f"Organization '{org_id}' not found")
    return organization


def get_active_literature(repo: LiteratureRepository, literature_id: str) -> Literature:
    literature = repo.get_by_id(literature_id)
    if literature is None:
        raise NotFoundError(f"Literature with ID '{literature_id}' not found")
    if not literature.is_active:
        raise ValidationError(f"Literature '{literature.title}' is inactive")
    return literature


def get_order(repo: OrderRepository, order_id: int) -> Order:
    order = repo.get_by_id(order_id)
    if order is None:
        raise NotFoundError(f"Order #{order_id} not found")
    return order
