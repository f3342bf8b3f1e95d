"""Application service: Create Organization use case."""

from __future__ import annotations

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.actor import Actor, Permission
from litdist.domain.model.organization import Organization, OrganizationType
from litdist.domain.repository.organization_repository import OrganizationRepository


class CreateOrganizationHandler:

    def __init__(self, organization_repo: OrganizationRepository) -> None:
        self._organization_repo = organization_repo

    def handle(
        self,
        actor: Actor,
        name: str,
        type: str,
        parent_id: str | None = None,
        contact_person: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> Organization:
        actor.require(Permission.MANAGE_ORGANIZATIONS)
        if not name or not name.strip():
            raise ValidationError("Organization name is required")

        numeric_ids = [int(o.id) for o in self._organization_repo.list_all() if o.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        organization = Organization(
            id=next_id,
            name=name.strip(),
            type=OrganizationType.parse(type),
            parent_id=parent_id,
            contact_person=contact_person,
            email=email,
            phone=phone,
            address=address,
        )
        self._organization_repo.tree().validate_parent(organization, parent_id)
        self._organization_repo.save(organization)
        return organization
