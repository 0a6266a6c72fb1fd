"""
RolePermissionEngine — the single place access decisions are made.

Holds the active role and answers two questions from the static role
table: "does this role hold permission P?" and "may this role open
service S?". A False answer is a normal decision, not an error; callers
branch on it (render a locked tile, return 403, ...).

The engine never talks to the session manager. Keeping the active role
in line with the logged-in user's stored role is the job of
`igilife.services.role_sync.RoleSessionSynchronizer`.
"""

from __future__ import annotations

import logging

from igilife.auth.permissions import Permission
from igilife.auth.roles import Role, RoleConfig, ROLE_CONFIGS

logger = logging.getLogger(__name__)


class RolePermissionEngine:
    def __init__(self, initial_role: Role | str = Role.USER):
        self._current_role = Role(initial_role)

    @property
    def current_role(self) -> Role:
        return self._current_role

    @property
    def role_config(self) -> RoleConfig:
        return ROLE_CONFIGS[self._current_role]

    @property
    def permissions(self) -> frozenset[Permission]:
        return self.role_config.permissions

    @property
    def available_roles(self) -> list[RoleConfig]:
        """Every role config, in declaration order (admin, agent, user)."""
        return [ROLE_CONFIGS[r] for r in Role]

    def set_user_role(self, role: Role | str) -> None:
        """Overwrite the active role. Switching to the same role is harmless."""
        new_role = Role(role)
        logger.info("Setting user role from %s to %s", self._current_role.value, new_role.value)
        self._current_role = new_role

    def has_permission(self, permission: Permission | str) -> bool:
        """
        Look up one capability for the active role.

        Raises ValueError for a name that is not a Permission, so a typo
        fails loudly instead of reading as a denial.
        """
        return Permission(permission) in self.role_config.permissions

    def can_access_service(self, service_id: str) -> bool:
        """Allow-list membership test; unknown service ids are always denied."""
        allowed = service_id in self.role_config.allowed_services
        logger.debug("Role %s accessing %s: %s", self._current_role.value, service_id, allowed)
        return allowed
