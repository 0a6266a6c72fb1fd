"""
Role definitions — permission bundles and service allow-lists per role.

Roles are NOT hierarchical: admin and agent overlap without one
containing the other (the agent can reach `car-tracker`, the admin
cannot). Every lookup is static; nothing here changes at runtime.
"""

from dataclasses import dataclass
from enum import Enum

from igilife.auth.permissions import Permission


class Role(str, Enum):
    ADMIN = "admin"
    AGENT = "agent"
    USER = "user"


@dataclass(frozen=True)
class RoleConfig:
    role: Role
    title: str
    description: str
    permissions: frozenset[Permission]
    allowed_services: tuple[str, ...]

    def permission_flags(self) -> dict[str, bool]:
        """All eight capabilities as name → bool, in declaration order."""
        return {p.value: p in self.permissions for p in Permission}

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "title": self.title,
            "description": self.description,
            "permissions": self.permission_flags(),
            "allowedServices": list(self.allowed_services),
        }


# ── Admin: every capability ──
_ADMIN_PERMS: frozenset[Permission] = frozenset(Permission)

# ── Agent: policy work and claims, no deletes, no administration ──
_AGENT_PERMS: frozenset[Permission] = frozenset({
    Permission.CREATE_POLICIES,
    Permission.EDIT_POLICIES,
    Permission.VIEW_ALL_CLIENTS,
    Permission.VIEW_REPORTS,
    Permission.PROCESS_CLAIMS,
})

# ── User (client): self-service only ──
_USER_PERMS: frozenset[Permission] = frozenset()


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: _ADMIN_PERMS,
    Role.AGENT: _AGENT_PERMS,
    Role.USER: _USER_PERMS,
}


ROLE_CONFIGS: dict[Role, RoleConfig] = {
    Role.ADMIN: RoleConfig(
        role=Role.ADMIN,
        title="Administrator",
        description="Full system access with all management capabilities",
        permissions=_ADMIN_PERMS,
        allowed_services=(
            "dashboard",
            "policies",
            "clients",
            "car-insurance",
            "bike-insurance",
            "life-insurance",
            "corporate-insurance",
            "travel-insurance",
            "employee-health",
            "reports",
            "settings",
            "user-management",
            "leads-management",
            "service-provision",
        ),
    ),
    Role.AGENT: RoleConfig(
        role=Role.AGENT,
        title="Insurance Agent",
        description="Policy management and client service capabilities",
        permissions=_AGENT_PERMS,
        allowed_services=(
            "dashboard",
            "policies",
            "clients",
            "car-insurance",
            "bike-insurance",
            "life-insurance",
            "travel-insurance",
            "employee-health",
            "corporate-insurance",
            "car-tracker",
            "employee-life",
            "leads-management",
            "service-provision",
            "services",
            "reports",
        ),
    ),
    Role.USER: RoleConfig(
        role=Role.USER,
        title="Client",
        description="View personal policies and access services",
        permissions=_USER_PERMS,
        allowed_services=(
            "dashboard",
            "my-policies",
            "claims",
            "profile",
            "services",
            "car-tracker",
            "employee-life",
            "car-insurance",
            "bike-insurance",
            "life-insurance",
            "travel-insurance",
            "employee-health",
            "corporate-insurance",
        ),
    ),
}
