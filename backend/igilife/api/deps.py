"""
API Dependencies — portal access, session guard, permission guards.

There is one Portal per application (single-client model). Routes get
it through `get_portal`; tests swap it by assigning a fresh Portal to
`app.state.portal`.

Guards:
  - `get_current_user`: 401 unless someone is logged in
  - `require(*perms)`: 403 unless the active role holds every permission
  - `require_service(service_id)`: 403 unless the active role may open it
"""

import logging

from fastapi import Depends, HTTPException, Request

from igilife.auth.permissions import Permission
from igilife.portal import Portal
from igilife.schemas.users import User

logger = logging.getLogger(__name__)


def get_portal(request: Request) -> Portal:
    return request.app.state.portal


def get_current_user(portal: Portal = Depends(get_portal)) -> User:
    user = portal.sessions.user
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


# ── Permission guards ────────────────────────────────────────────────────────

def require(*perms: Permission):
    """
    FastAPI dependency that checks the active role holds ALL listed permissions.

    Usage:
        @router.get("/users")
        async def list_users(portal: Portal = Depends(require(Permission.MANAGE_USERS))):
            ...
    """
    async def _check(
        portal: Portal = Depends(get_portal),
        user: User = Depends(get_current_user),
    ) -> Portal:
        for p in perms:
            if not portal.access.has_permission(p):
                logger.info("Denied %s to %s (%s)", p.value, user.email, portal.access.current_role.value)
                raise HTTPException(
                    status_code=403,
                    detail=f"Insufficient permissions: requires {p.value}",
                )
        return portal
    return _check


def require_service(service_id: str):
    """FastAPI dependency that checks the active role may open `service_id`."""
    async def _check(
        portal: Portal = Depends(get_portal),
        user: User = Depends(get_current_user),
    ) -> Portal:
        if not portal.access.can_access_service(service_id):
            logger.info("Denied service %s to %s (%s)", service_id, user.email, portal.access.current_role.value)
            raise HTTPException(
                status_code=403,
                detail=f"Access to {service_id} is not available for your role",
            )
        return portal
    return _check
