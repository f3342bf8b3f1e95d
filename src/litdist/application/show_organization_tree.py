"""Application service: Show Organization Tree use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from litdist.domain.model.organization import Organization
from litdist.domain.repository.organization_repository import OrganizationRepository


@dataclass(frozen=True)
class OrganizationTreeDTO:
    organization: Organization
    ancestors: list[Organization]
    children: list[Organization]


class ShowOrganizationTreeHandler:

    def __init__(self, organization_repo: OrganizationRepository) -> None:
        self._organization_repo = organization_repo

    def handle(self, org_id: str) -> OrganizationTreeDTO:
        tree = self._organization_repo.tree()
        return OrganizationTreeDTO(
            organization=tree.get(org_id),
            ancestors=tree.ancestors(org_id),
            children=tree.children(org_id),
        )
