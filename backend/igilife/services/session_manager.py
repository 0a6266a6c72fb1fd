"""
Credential & Session Manager

Owns the credential collection and the active session in the persisted
store:
- Bootstrap: seed one demo account per role on an empty store
- Login / logout against the stored credentials
- Profile and role updates, written through to both the credential
  record and the session so the two copies never disagree
- Account administration (create, list, delete)

Public results are booleans or password-free `User` values. Storage and
decode failures are logged and reported as False; they never escape to
the caller.
"""

import logging
import secrets
import time
from typing import Callable

from pydantic import ValidationError

from igilife.auth.roles import Role
from igilife.config import settings
from igilife.errors import StorageError
from igilife.schemas.users import CredentialList, CredentialRecord, NewUser, ProfileUpdate, User
from igilife.seed.demo_data import DEFAULT_USERS
from igilife.services.store import PersistedStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[User | None], None]


def _same_email(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def _now_ms() -> int:
    return int(time.time() * 1000)


class CredentialSessionManager:
    """Authenticates principals and keeps the session in the store."""

    def __init__(
        self,
        store: PersistedStore,
        *,
        users_key: str | None = None,
        session_key: str | None = None,
    ):
        self.store = store
        self.users_key = users_key or settings.users_key
        self.session_key = session_key or settings.session_key
        self._listeners: list[SessionListener] = []

        # A store that cannot be bootstrapped is a startup fault, so this raises.
        self._bootstrap()
        self._user: User | None = self._load_session()

    # ── Session state ───────────────────────────────────────────────────

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def subscribe(self, listener: SessionListener) -> None:
        """Call `listener(user)` after every change to the session."""
        self._listeners.append(listener)

    def _set_session(self, user: User | None) -> None:
        if user is None:
            self.store.remove(self.session_key)
        else:
            self.store.write(self.session_key, user.model_dump_json(by_alias=True, exclude_none=True))
        self._user = user
        for listener in self._listeners:
            listener(user)

    # ── Storage helpers ─────────────────────────────────────────────────

    def _bootstrap(self) -> None:
        if self.store.read(self.users_key) is None:
            seed = CredentialList.validate_python(DEFAULT_USERS)
            self._save_users(seed)
            logger.info("Seeded %d demo accounts into %s", len(seed), self.users_key)

    def _load_users(self) -> list[CredentialRecord]:
        raw = self.store.read(self.users_key)
        if raw is None:
            return CredentialList.validate_python(DEFAULT_USERS)
        try:
            return CredentialList.validate_json(raw)
        except ValidationError as e:
            raise StorageError(self.users_key, f"undecodable credential collection ({e.error_count()} errors)") from e

    def _save_users(self, users: list[CredentialRecord]) -> None:
        self.store.write(
            self.users_key,
            CredentialList.dump_json(users, by_alias=True, exclude_none=True).decode(),
        )

    def _write_through(self, users: list[CredentialRecord], session_user: User) -> None:
        """
        Save the collection, then the session. If the session write fails
        the collection is put back to its previous text, so the record
        and the session never disagree.
        """
        previous = self.store.read(self.users_key)
        self._save_users(users)
        try:
            self._set_session(session_user)
        except StorageError:
            try:
                if previous is None:
                    self.store.remove(self.users_key)
                else:
                    self.store.write(self.users_key, previous)
            except StorageError:
                logger.exception("Could not restore %s after a failed session write", self.users_key)
            raise

    def _load_session(self) -> User | None:
        raw = self.store.read(self.session_key)
        if raw is None:
            return None
        try:
            user = User.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding undecodable session record")
            self.store.remove(self.session_key)
            return None

        try:
            users = self._load_users()
        except StorageError:
            logger.exception("Starting logged out: credential collection is unreadable")
            return None
        if not any(u.id == user.id for u in users):
            logger.warning("Discarding session for missing user %s", user.id)
            self.store.remove(self.session_key)
            return None
        return user

    # ── Authentication ──────────────────────────────────────────────────

    def login(self, email: str, password: str) -> bool:
        """
        Authenticate by email (case-insensitive) and exact password.

        Unknown email and wrong password fail the same way.
        """
        try:
            matches = [u for u in self._load_users() if _same_email(u.email, email)]
            if len(matches) != 1 or not secrets.compare_digest(
                matches[0].password.encode(), password.encode()
            ):
                logger.info("Login failed for %s", email)
                return False

            self._set_session(matches[0].to_public())
        except StorageError:
            logger.exception("Login aborted by storage failure")
            return False

        logger.info("Login: %s (%s)", self._user.email, self._user.role.value)
        return True

    def logout(self) -> None:
        if self._user is not None:
            logger.info("Logout: %s", self._user.email)
        try:
            self._set_session(None)
        except StorageError:
            logger.exception("Failed to clear the persisted session")
            self._user = None

    # ── Mutations of the logged-in principal ────────────────────────────

    def update_user_role(self, role: Role | str) -> bool:
        """Change the session user's role in both the session and the store."""
        if self._user is None:
            return False

        new_role = Role(role)
        try:
            users = self._load_users()
            idx = next((i for i, u in enumerate(users) if u.id == self._user.id), None)
            if idx is None:
                logger.warning("Role update for missing user %s", self._user.id)
                return False
            users[idx] = users[idx].model_copy(update={"role": new_role})
            self._write_through(users, self._user.model_copy(update={"role": new_role}))
        except StorageError:
            logger.exception("Role update for %s failed", self._user.id)
            return False
        return True

    def update_user_profile(self, profile: ProfileUpdate | dict) -> bool:
        """
        Merge name/email/department/agentId into the logged-in user.

        Rejected (False, nothing written) when the new email belongs to
        another account.
        """
        if self._user is None:
            return False

        try:
            if isinstance(profile, dict):
                profile = ProfileUpdate.model_validate(profile)
            changes = profile.model_dump(exclude_unset=True, exclude_none=True)

            users = self._load_users()
            new_email = changes.get("email")
            if new_email and new_email != self._user.email:
                if any(u.id != self._user.id and _same_email(u.email, new_email) for u in users):
                    logger.info("Profile update rejected: %s already in use", new_email)
                    return False

            idx = next((i for i, u in enumerate(users) if u.id == self._user.id), None)
            if idx is None:
                logger.warning("Profile update for missing user %s", self._user.id)
                return False

            users[idx] = users[idx].model_copy(update=changes)
            self._write_through(users, self._user.model_copy(update=changes))
            return True
        except Exception:
            logger.exception("Failed to update user profile")
            return False

    # ── Account administration ──────────────────────────────────────────

    def create_user(self, data: NewUser | dict) -> bool:
        """Append a new credential record; False if the email is taken."""
        if isinstance(data, dict):
            try:
                data = NewUser.model_validate(data)
            except ValidationError:
                logger.info("Create user rejected: invalid account data")
                return False

        try:
            users = self._load_users()
            if any(_same_email(u.email, data.email) for u in users):
                logger.info("Create user rejected: %s already exists", data.email)
                return False

            record = CredentialRecord(id=self._next_user_id(users), **data.model_dump())
            users.append(record)
            self._save_users(users)
        except StorageError:
            logger.exception("Create user failed for %s", data.email)
            return False

        logger.info("User created: %s (%s) id=%s", record.email, record.role.value, record.id)
        return True

    def get_all_users(self) -> list[User]:
        """Every account without its password, in storage order."""
        try:
            return [u.to_public() for u in self._load_users()]
        except StorageError:
            logger.exception("Failed to list users")
            return []

    def delete_user(self, user_id: str) -> bool:
        """Remove one account. Deleting the session owner also logs out."""
        try:
            users = self._load_users()
            remaining = [u for u in users if u.id != user_id]
            if len(remaining) == len(users):
                return False
            self._save_users(remaining)
        except StorageError:
            logger.exception("Delete user %s failed", user_id)
            return False

        logger.info("User deleted: id=%s", user_id)
        if self._user is not None and self._user.id == user_id:
            self.logout()
        return True

    @staticmethod
    def _next_user_id(users: list[CredentialRecord]) -> str:
        """Millisecond timestamp, bumped past any id already taken."""
        taken = {u.id for u in users}
        candidate = _now_ms()
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
