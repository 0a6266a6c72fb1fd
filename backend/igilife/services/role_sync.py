"""
Role-Session Synchronizer

Keeps the RolePermissionEngine's active role equal to the logged-in
user's stored role. The session is authoritative: whenever the session
holder or their role changes, the engine is corrected to match.

A user-initiated role switch runs the other way: it sets the engine,
writes the new role through the session manager, then sends the caller
to the landing view.
"""

import logging
from typing import Callable

from igilife.auth.engine import RolePermissionEngine
from igilife.auth.roles import Role, ROLE_CONFIGS
from igilife.config import settings
from igilife.schemas.users import User
from igilife.services.notifications import LogNotifier, Notification, Notifier, Severity
from igilife.services.session_manager import CredentialSessionManager

logger = logging.getLogger(__name__)


class RoleSessionSynchronizer:
    def __init__(
        self,
        manager: CredentialSessionManager,
        engine: RolePermissionEngine,
        *,
        on_navigate: Callable[[str], None] | None = None,
        notifier: Notifier | None = None,
        landing_view: str | None = None,
    ):
        self.manager = manager
        self.engine = engine
        self.on_navigate = on_navigate
        self.notifier = notifier or LogNotifier()
        self.landing_view = landing_view or settings.default_landing_view
        self._last_seen: tuple[str, Role] | None = None

        manager.subscribe(self._on_session_change)
        self._on_session_change(manager.user)

    def _on_session_change(self, user: User | None) -> None:
        seen = (user.id, user.role) if user is not None else None
        if seen == self._last_seen:
            return
        self._last_seen = seen
        self.reconcile()

    def reconcile(self) -> bool:
        """Align the engine with the session role. Returns True if it changed anything."""
        user = self.manager.user
        if user is None or user.role == self.engine.current_role:
            return False
        logger.info(
            "Syncing role: user.role=%s, currentRole=%s",
            user.role.value, self.engine.current_role.value,
        )
        self.engine.set_user_role(user.role)
        return True

    def switch_role(self, role: Role | str) -> bool:
        """
        User-initiated switch: update the engine, then the stored user.

        If the stored write fails the engine is pulled back to the
        session's role, since the session wins any disagreement.
        """
        new_role = Role(role)
        if not self.manager.is_authenticated:
            return False

        logger.info("Role change requested: %s -> %s", self.engine.current_role.value, new_role.value)
        self.engine.set_user_role(new_role)
        if not self.manager.update_user_role(new_role):
            self.reconcile()
            self.notifier.notify(Notification(
                title="Role Switch Failed",
                description="Your role could not be saved. Please try again.",
                severity=Severity.ERROR,
            ))
            return False

        self.notifier.notify(Notification(
            title="Role Switched",
            description=f"You are now using the portal as {ROLE_CONFIGS[new_role].title}.",
            severity=Severity.SUCCESS,
        ))
        if self.on_navigate is not None:
            self.on_navigate(self.landing_view)
        return True
