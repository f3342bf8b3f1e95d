"""Application service: Deactivate Organization use case (soft delete)."""

from __future__ import annotations

from litdist.domain.exceptions import NotFoundError, ValidationError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.repository.organization_repository import OrganizationRepository


class DeactivateOrganizationHandler:

    def __init__(self, organization_repo: OrganizationRepository) -> None:
        self._organization_repo = organization_repo

    def handle(self, actor: Actor, org_id: str) -> None:
        actor.require(Permission.MANAGE_ORGANIZATIONS)
        organization = self._organization_repo.get_by_id(org_id)
        if organization is None:
            raise NotFoundError(f"Organization '{org_id}' not found")

        children = self._organization_repo.tree().children(org_id)
        if any(child.is_active for child in children):
            raise ValidationError("Cannot deactivate organization with active child organizations")

        organization.deactivate()
        self._organization_repo.save(organization)
