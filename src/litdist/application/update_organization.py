"""Application service: Update Organization use case.

Renames and/or moves an organization within the hierarchy. Moving below
one of its own descendants is rejected, which keeps the tree acyclic.
"""

from __future__ import annotations

from litdist.domain.exceptions import NotFoundError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.organization import Organization
from litdist.domain.repository.organization_repository import OrganizationRepository

_KEEP = object()


class UpdateOrganizationHandler:

    def __init__(self, organization_repo: OrganizationRepository) -> None:
        self._organization_repo = organization_repo

    def handle(
        self,
        actor: Actor,
        org_id: str,
        name: str | None = None,
        parent_id: str | None | object = _KEEP,
    ) -> Organization:
        """Pass ``parent_id=None`` to detach from the parent."""
        actor.require(Permission.MANAGE_ORGANIZATIONS)
        organization = self._organization_repo.get_by_id(org_id)
        if organization is None:
            raise NotFoundError(f"Organization '{org_id}' not found")

        if name is not None:
            organization.rename(name)
        if parent_id is not _KEEP:
            self._organization_repo.tree().validate_parent(organization, parent_id)
            organization.parent_id = parent_id  # type: ignore[assignment]

        self._organization_repo.save(organization)
        return organization
