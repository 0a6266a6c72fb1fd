"""
Permission constants — the eight independent capabilities a role can hold.

Values keep the portal's wire names (`canManageUsers`, ...) so that a
permission sent by a client parses straight into the enum; anything
outside this list is rejected instead of silently answering False.
"""

from enum import Enum


class Permission(str, Enum):
    # ── Policies ──
    CREATE_POLICIES = "canCreatePolicies"
    EDIT_POLICIES = "canEditPolicies"
    DELETE_POLICIES = "canDeletePolicies"

    # ── Clients ──
    VIEW_ALL_CLIENTS = "canViewAllClients"

    # ── Administration ──
    MANAGE_USERS = "canManageUsers"
    MANAGE_SETTINGS = "canManageSettings"

    # ── Operations ──
    VIEW_REPORTS = "canViewReports"
    PROCESS_CLAIMS = "canProcessClaims"
