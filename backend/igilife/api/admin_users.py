"""Admin user management — create, list, search and delete accounts."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from igilife.api.deps import get_current_user, require
from igilife.auth.permissions import Permission
from igilife.auth.roles import Role
from igilife.config import settings
from igilife.portal import Portal
from igilife.schemas.users import NewUser, User
from igilife.services.notifications import Notification, Severity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["admin"])


class CreateUserRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    confirm_password: str = Field(alias="confirmPassword")
    role: Role = Role.USER
    department: str | None = None
    agent_id: str | None = Field(None, alias="agentId")


def filter_users(users: list[User], term: str) -> list[User]:
    """Case-insensitive substring search over name, email, agent ID and role."""
    needle = term.lower()
    return [
        u for u in users
        if needle in u.name.lower()
        or needle in u.email.lower()
        or (u.agent_id and needle in u.agent_id.lower())
        or needle in u.role.value
    ]


@router.get("")
async def list_users(q: str = "", portal: Portal = Depends(require(Permission.MANAGE_USERS))):
    """List all accounts (never with passwords), optionally filtered by `q`."""
    users = portal.sessions.get_all_users()
    if q:
        users = filter_users(users, q)
    return [u.dump() for u in users]


@router.post("", status_code=201)
async def create_user(body: CreateUserRequest,
                      portal: Portal = Depends(require(Permission.MANAGE_USERS))):
    """Create a new account."""
    if body.password != body.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match.")
    if len(body.password) < settings.min_password_length:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.min_password_length} characters long.",
        )

    new_user = NewUser(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        department=body.department or None,
        agent_id=body.agent_id or None,
    )
    if not portal.sessions.create_user(new_user):
        raise HTTPException(status_code=409, detail="Email already exists. Please use a different email address.")

    created = next(u for u in portal.sessions.get_all_users() if u.email.lower() == new_user.email.lower())
    logger.info("User created: %s (%s) by %s", created.email, created.role.value, portal.sessions.user.email)
    portal.notifier.notify(Notification(
        title="User Created",
        description=f"New {created.role.value} user has been successfully created.",
        severity=Severity.SUCCESS,
    ))
    return created.dump()


@router.delete("/{user_id}")
async def delete_user(user_id: str,
                      portal: Portal = Depends(require(Permission.MANAGE_USERS)),
                      current: User = Depends(get_current_user)):
    """Delete an account. Administrators cannot delete themselves here."""
    if user_id == current.id:
        portal.notifier.notify(Notification(
            title="Cannot Delete",
            description="You cannot delete your own account.",
            severity=Severity.ERROR,
        ))
        raise HTTPException(status_code=400, detail="You cannot delete your own account.")

    if not portal.sessions.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")

    portal.notifier.notify(Notification(
        title="User Deleted",
        description="User has been successfully deleted.",
        severity=Severity.SUCCESS,
    ))
    return {"ok": True}
