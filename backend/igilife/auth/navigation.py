"""
Dashboard navigation derived from the active role.

Menu items that name a permission are gated by that permission; the
rest are gated by the service allow-list. Service tiles come from the
insurance catalogue for staff roles and from the self-service list for
clients, each filtered by the allow-list.
"""

from dataclasses import dataclass

from igilife.auth.engine import RolePermissionEngine
from igilife.auth.permissions import Permission
from igilife.auth.roles import Role


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    requires_permission: Permission | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}


INSURANCE_SERVICES: tuple[NavItem, ...] = (
    NavItem("car-insurance", "Car Insurance"),
    NavItem("car-tracker", "Car Tracker"),
    NavItem("bike-insurance", "Bike Insurance"),
    NavItem("life-insurance", "Life Insurance"),
    NavItem("employee-life", "Employee Life"),
    NavItem("corporate-insurance", "Corporate Insurance"),
    NavItem("travel-insurance", "Travel Insurance"),
    NavItem("employee-health", "Employee Health"),
)

CLIENT_SERVICES: tuple[NavItem, ...] = (
    NavItem("my-policies", "My Policies"),
    NavItem("services", "Browse Services"),
    NavItem("claims", "Claims"),
    NavItem("profile", "Profile"),
)


def navigation_items(role: Role) -> list[NavItem]:
    is_client = role == Role.USER
    return [
        NavItem("dashboard", "Dashboard"),
        NavItem("my-policies", "My Policies") if is_client else NavItem("policies", "All Policies"),
        NavItem("clients", "Clients", Permission.VIEW_ALL_CLIENTS),
        NavItem("user-management", "User Management", Permission.MANAGE_USERS),
        NavItem("leads-management", "Quote Leads", Permission.VIEW_REPORTS),
        NavItem("service-provision", "Provide Services", Permission.CREATE_POLICIES),
    ]


def visible_navigation(engine: RolePermissionEngine) -> list[NavItem]:
    visible = []
    for item in navigation_items(engine.current_role):
        if item.requires_permission is not None:
            allowed = engine.has_permission(item.requires_permission)
        else:
            allowed = engine.can_access_service(item.id)
        if allowed:
            visible.append(item)
    return visible


def visible_services(engine: RolePermissionEngine) -> list[NavItem]:
    catalogue = CLIENT_SERVICES if engine.current_role == Role.USER else INSURANCE_SERVICES
    return [s for s in catalogue if engine.can_access_service(s.id)]
