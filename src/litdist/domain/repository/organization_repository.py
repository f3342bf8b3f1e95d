"""Abstract repository for Organization aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from litdist.domain.model.organization import Organization, OrganizationTree


class OrganizationRepository(ABC):

    @abstractmethod
    def get_by_id(self, org_id: str) -> Organization | None:
        """Return an organization by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Organization]:
        """Return every organization, active or not."""

    @abstractmethod
    def save(self, organization: Organization) -> None:
        """Persist a new or updated organization."""

    def tree(self) -> OrganizationTree:
        return OrganizationTree(self.list_all())
