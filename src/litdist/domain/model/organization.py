"""Organization aggregate and the organizational tree.

Organizations form a tree (REGION > LOCALITY > GROUP / LOCAL_SUBCOMMITTEE).
Each node only stores its ``parent_id``; the tree is an arena of nodes keyed
by id, so walking upwards never follows object references and a corrupted
parent chain is detected instead of looping forever.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from litdist.domain.exceptions import NotFoundError, ValidationError


class OrganizationType(Enum):
    GROUP = "GROUP"
    LOCAL_SUBCOMMITTEE = "LOCAL_SUBCOMMITTEE"
    LOCALITY = "LOCALITY"
    REGION = "REGION"

    @staticmethod
    def parse(raw: str) -> OrganizationType:
        try:
            return OrganizationType(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Invalid organization type: {raw!r}") from exc


# parent type -> child types it may hold
ALLOWED_CHILDREN: dict[OrganizationType, frozenset[OrganizationType]] = {
    OrganizationType.REGION: frozenset({OrganizationType.LOCALITY}),
    OrganizationType.LOCALITY: frozenset(
        {OrganizationType.GROUP, OrganizationType.LOCAL_SUBCOMMITTEE}
    ),
    OrganizationType.GROUP: frozenset(),
    OrganizationType.LOCAL_SUBCOMMITTEE: frozenset(),
}

# ordering unit type -> supplier types it may order from
ALLOWED_SUPPLIERS: dict[OrganizationType, frozenset[OrganizationType]] = {
    OrganizationType.GROUP: frozenset({OrganizationType.LOCALITY, OrganizationType.REGION}),
    OrganizationType.LOCAL_SUBCOMMITTEE: frozenset(
        {OrganizationType.LOCALITY, OrganizationType.REGION}
    ),
    OrganizationType.LOCALITY: frozenset({OrganizationType.REGION}),
    OrganizationType.REGION: frozenset({OrganizationType.REGION}),
}


@dataclass
class Organization:
    id: str
    name: str
    type: OrganizationType
    parent_id: str | None = None
    is_active: bool = True
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Organization name is required")
        self.name = name.strip()

    def deactivate(self) -> None:
        """Soft delete: history keeps pointing at the record."""
        self.is_active = False


class OrganizationTree:
    """Read-only view over a set of organizations linked by ``parent_id``."""

    def __init__(self, organizations: Iterable[Organization]) -> None:
        self._nodes: dict[str, Organization] = {org.id: org for org in organizations}

    def get(self, org_id: str) -> Organization:
        org = self._nodes.get(org_id)
        if org is None:
            raise NotFoundError(f"Organization '{org_id}' not found")
        return org

    def ancestors(self, org_id: str) -> list[Organization]:
        """Return the parent chain, nearest first."""
        chain: list[Organization] = []
        visited = {org_id}
        current = self.get(org_id)
        while current.parent_id is not None:
            if current.parent_id in visited:
                raise ValidationError(
                    f"Cycle detected in organization hierarchy at '{current.parent_id}'"
                )
            visited.add(current.parent_id)
            current = self.get(current.parent_id)
            chain.append(current)
        return chain

    def children(self, org_id: str) -> list[Organization]:
        self.get(org_id)
        return [org for org in self._nodes.values() if org.parent_id == org_id]

    def is_ancestor(self, ancestor_id: str, org_id: str) -> bool:
        return any(org.id == ancestor_id for org in self.ancestors(org_id))

    # --- Rules ----------------------------------------------------------------

    def validate_parent(self, child: Organization, parent_id: str | None) -> None:
        """Check that *child* may hang below *parent_id*.

        Rejects self-parenting, parenting below one's own descendant and
        parent/child type combinations the hierarchy does not allow.
        """
        if parent_id is None:
            return
        if parent_id == child.id:
            raise ValidationError("Organization cannot be parent of itself")
        parent = self.get(parent_id)
        if child.id in self._nodes and self.is_ancestor(child.id, parent_id):
            raise ValidationError(
                f"'{parent.name}' is a descendant of '{child.name}' and cannot be its parent"
            )
        if child.type not in ALLOWED_CHILDREN[parent.type]:
            raise ValidationError(
                f"Invalid organization hierarchy: {parent.type.value} "
                f"cannot contain {child.type.value}"
            )

    def validate_supplier(self, from_org_id: str, to_org_id: str) -> None:
        """Check that *from_org_id* may order from *to_org_id*.

        A unit orders from one of its ancestors of an allowed supplier
        type; regions may also order from any other region.
        """
        if from_org_id == to_org_id:
            raise ValidationError("An organization cannot order from itself")
        ordering = self.get(from_org_id)
        supplier = self.get(to_org_id)
        for org in (ordering, supplier):
            if not org.is_active:
                raise ValidationError(f"Organization '{org.name}' is inactive")

        if supplier.type not in ALLOWED_SUPPLIERS[ordering.type]:
            raise ValidationError(
                f"{ordering.type.value} cannot order from {supplier.type.value}"
            )
        if ordering.type == OrganizationType.REGION:
            return
        if not self.is_ancestor(supplier.id, ordering.id):
            raise ValidationError(
                f"'{ordering.name}' can only order from its parent organizations, "
                f"not from '{supplier.name}'"
            )
