"""
Roles & access API — role catalogue, role switching, access queries.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from igilife.api.auth import session_payload
from igilife.api.deps import get_current_user, get_portal
from igilife.auth.permissions import Permission
from igilife.auth.roles import Role
from igilife.portal import Portal
from igilife.schemas.users import User

router = APIRouter(prefix="/api", tags=["roles"])


class RoleSwitchRequest(BaseModel):
    role: Role


@router.get("/roles")
async def list_roles(portal: Portal = Depends(get_portal)):
    """Every role config, in declaration order."""
    return [config.to_dict() for config in portal.access.available_roles]


@router.post("/roles/switch")
async def switch_role(body: RoleSwitchRequest,
                      portal: Portal = Depends(get_portal),
                      user: User = Depends(get_current_user)):
    """Switch the logged-in user's role and return to the landing view."""
    if not portal.role_sync.switch_role(body.role):
        raise HTTPException(status_code=500, detail="Role could not be saved")
    payload = session_payload(portal, portal.sessions.user)
    payload["view"] = portal.current_view
    return payload


@router.get("/access/services/{service_id}")
async def check_service(service_id: str,
                        portal: Portal = Depends(get_portal),
                        user: User = Depends(get_current_user)):
    return {
        "service": service_id,
        "role": portal.access.current_role.value,
        "allowed": portal.access.can_access_service(service_id),
    }


@router.get("/access/permissions/{permission}")
async def check_permission(permission: Permission,
                           portal: Portal = Depends(get_portal),
                           user: User = Depends(get_current_user)):
    return {
        "permission": permission.value,
        "role": portal.access.current_role.value,
        "allowed": portal.access.has_permission(permission),
    }
