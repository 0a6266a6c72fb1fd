"""Authentication API — login, logout, current session, own profile."""

import logging
import re

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from igilife.api.deps import get_current_user, get_portal
from igilife.auth.navigation import visible_navigation, visible_services
from igilife.portal import Portal
from igilife.schemas.users import ProfileUpdate, User
from igilife.services.notifications import Notification, Severity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ── Request schemas ───────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileRequest(BaseModel):
    name: str
    email: str
    department: str = ""
    agent_id: str = Field("", alias="agentId")


# ── Helpers ───────────────────────────────────────────────────────────────────

def session_payload(portal: Portal, user: User) -> dict:
    config = portal.access.role_config
    return {
        "user": user.dump(),
        "role": config.to_dict(),
        "permissions": config.permission_flags(),
        "navigation": [item.to_dict() for item in visible_navigation(portal.access)],
        "services": [item.to_dict() for item in visible_services(portal.access)],
    }


def validate_profile(body: ProfileRequest) -> ProfileUpdate:
    """Trim the form and apply the profile rules; 400 with the first failing rule."""
    name = body.name.strip()
    email = body.email.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    if not EMAIL_RE.match(email):
        raise HTTPException(status_code=400, detail="Please enter a valid email address")
    return ProfileUpdate(
        name=name,
        email=email,
        department=body.department.strip(),
        agent_id=body.agent_id.strip(),
    )


# ── Endpoints ─────────────────────────────────────────────────────────────────

@router.post("/login")
async def login(body: LoginRequest, portal: Portal = Depends(get_portal)):
    """Authenticate with email + password and open the session."""
    if not portal.sessions.login(body.email, body.password):
        portal.notifier.notify(Notification(
            title="Login Failed",
            description="Invalid email or password",
            severity=Severity.ERROR,
        ))
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user = portal.sessions.user
    portal.notifier.notify(Notification(
        title="Welcome back",
        description=f"Signed in as {user.name}",
        severity=Severity.SUCCESS,
    ))
    return session_payload(portal, user)


@router.post("/logout")
async def logout(portal: Portal = Depends(get_portal)):
    """Close the session. Safe to call when nobody is logged in."""
    portal.sessions.logout()
    return {"ok": True}


@router.get("/me")
async def me(portal: Portal = Depends(get_portal), user: User = Depends(get_current_user)):
    """Current user with the derived role config, permissions and navigation."""
    return session_payload(portal, user)


@router.put("/me")
async def update_profile(body: ProfileRequest,
                         portal: Portal = Depends(get_portal),
                         user: User = Depends(get_current_user)):
    """Edit own name, email, department and agent ID."""
    profile = validate_profile(body)

    if profile.email.lower() != user.email.lower() and any(
        u.id != user.id and u.email.lower() == profile.email.lower()
        for u in portal.sessions.get_all_users()
    ):
        raise HTTPException(status_code=409, detail="Email already in use by another account")

    if not portal.sessions.update_user_profile(profile):
        portal.notifier.notify(Notification(
            title="Update Failed",
            description="Failed to update profile. Please try again.",
            severity=Severity.ERROR,
        ))
        raise HTTPException(status_code=400, detail="Failed to update profile. Please try again.")

    portal.notifier.notify(Notification(
        title="Profile Updated",
        description="Your profile information has been successfully updated.",
        severity=Severity.SUCCESS,
    ))
    return session_payload(portal, portal.sessions.user)
