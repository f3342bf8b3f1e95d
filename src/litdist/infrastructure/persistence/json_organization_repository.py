"""JSON-file-backed implementation of OrganizationRepository."""

from __future__ import annotations

from pathlib import Path

from litdist.domain.model.organization import Organization, OrganizationType
from litdist.domain.repository.organization_repository import OrganizationRepository
from litdist.infrastructure.persistence.json_file import JsonFile


class JsonOrganizationRepository(OrganizationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrganizationRepository interface -------------------------------------

    def get_by_id(self, org_id: str) -> Organization | None:
        for raw in self._file.load():
            if raw["id"] == org_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Organization]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, organization: Organization) -> None:
        with self._file.update() as records:
            for i, raw in enumerate(records):
                if raw["id"] == organization.id:
                    records[i] = self._to_raw(organization)
                    break
            else:
                records.append(self._to_raw(organization))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(org: Organization) -> dict:
        return {
            "id": org.id,
            "name": org.name,
            "type": org.type.value,
            "parent_id": org.parent_id,
            "is_active": org.is_active,
            "contact_person": org.contact_person,
            "email": org.email,
            "phone": org.phone,
            "address": org.address,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Organization:
        return Organization(
            id=raw["id"],
            name=raw["name"],
            type=OrganizationType(raw["type"]),
            parent_id=raw.get("parent_id"),
            is_active=raw.get("is_active", True),
            contact_person=raw.get("contact_person"),
            email=raw.get("email"),
            phone=raw.get("phone"),
            address=raw.get("address"),
        )
