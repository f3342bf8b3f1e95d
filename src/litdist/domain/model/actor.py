"""The acting user and the role/permission table.

Authentication happens outside the core; every use case receives an
``Actor`` describing who is asking.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from litdist.domain.exceptions import PermissionDeniedError, ValidationError


class UserRole(Enum):
    GROUP = "GROUP"
    LOCAL_SUBCOMMITTEE = "LOCAL_SUBCOMMITTEE"
    LOCALITY = "LOCALITY"
    REGION = "REGION"
    ADMIN = "ADMIN"

    @staticmethod
    def parse(raw: str) -> UserRole:
        try:
            return UserRole(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {raw!r}") from exc


class Permission(Enum):
    MANAGE_ORGANIZATIONS = "MANAGE_ORGANIZATIONS"
    MANAGE_LITERATURE = "MANAGE_LITERATURE"
    MANAGE_INVENTORY = "MANAGE_INVENTORY"
    CREATE_ORDERS = "CREATE_ORDERS"
    PROCESS_ORDERS = "PROCESS_ORDERS"
    OVERRIDE_LOCKS = "OVERRIDE_LOCKS"
    VIEW_REPORTS = "VIEW_REPORTS"


ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.REGION: frozenset(
        {
            Permission.MANAGE_LITERATURE,
            Permission.MANAGE_INVENTORY,
            Permission.CREATE_ORDERS,
            Permission.PROCESS_ORDERS,
            Permission.VIEW_REPORTS,
        }
    ),
    UserRole.LOCALITY: frozenset(
        {
            Permission.MANAGE_INVENTORY,
            Permission.CREATE_ORDERS,
            Permission.PROCESS_ORDERS,
            Permission.VIEW_REPORTS,
        }
    ),
    UserRole.GROUP: frozenset({Permission.CREATE_ORDERS}),
    UserRole.LOCAL_SUBCOMMITTEE: frozenset({Permission.CREATE_ORDERS}),
}


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: UserRole
    organization_id: str | None = None

    @property
    def is_elevated(self) -> bool:
        return Permission.OVERRIDE_LOCKS in ROLE_PERMISSIONS[self.role]

    def can(self, permission: Permission) -> bool:
        return permission in ROLE_PERMISSIONS[self.role]

    def require(self, permission: Permission) -> None:
        if not self.can(permission):
            raise PermissionDeniedError(
                f"Role {self.role.value} is not allowed to {permission.value.lower().replace('_', ' ')}"
            )

    def require_organization(self, organization_id: str) -> None:
        """Non-admin users may only act on behalf of their own organization."""
        if self.role == UserRole.ADMIN:
            return
        if self.organization_id != organization_id:
            raise PermissionDeniedError(
                f"Access to organization '{organization_id}' is not allowed"
            )
