from igilife.auth.permissions import Permission
from igilife.auth.roles import Role, RoleConfig, ROLE_PERMISSIONS, ROLE_CONFIGS
from igilife.auth.engine import RolePermissionEngine

__all__ = [
    "Permission", "Role", "RoleConfig", "ROLE_PERMISSIONS", "ROLE_CONFIGS",
    "RolePermissionEngine",
]
