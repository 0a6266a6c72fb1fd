"""Tests for the credential & session manager."""

import json

import pytest

from igilife.auth.roles import Role
from igilife.config import settings
from igilife.errors import StorageError
from igilife.schemas.users import CredentialList, ProfileUpdate
from igilife.seed.demo_data import DEMO_PASSWORD
from igilife.services.session_manager import CredentialSessionManager


def stored_users(store) -> list[dict]:
    return json.loads(store.read(settings.users_key))


def stored_session(store) -> dict | None:
    raw = store.read(settings.session_key)
    return json.loads(raw) if raw is not None else None


def fail_writes_to(store, monkeypatch, failing_key: str) -> None:
    """Make writes to one key raise while every other key keeps working."""
    real_write = store.write

    def write(key, value):
        if key == failing_key:
            raise StorageError(key, "disk full")
        real_write(key, value)

    monkeypatch.setattr(store, "write", write)


@pytest.fixture
def manager(store) -> CredentialSessionManager:
    return CredentialSessionManager(store)


# ── Bootstrap ─────────────────────────────────────────────────────────────────

class TestBootstrap:
    def test_empty_store_is_seeded_with_one_account_per_role(self, manager, store):
        users = stored_users(store)
        assert len(users) == 3
        assert sorted(u["role"] for u in users) == ["admin", "agent", "user"]
        assert manager.user is None

    def test_existing_collection_is_loaded_as_is(self, store):
        store.write(settings.users_key, json.dumps([
            {"id": "9", "name": "Only One", "email": "one@igilife.com", "role": "agent", "password": "pw"},
        ]))
        manager = CredentialSessionManager(store)
        assert [u.id for u in manager.get_all_users()] == ["9"]

    def test_session_restored_across_restart(self, store):
        first = CredentialSessionManager(store)
        assert first.login("agent@igilife.com", DEMO_PASSWORD)

        second = CredentialSessionManager(store)
        assert second.user is not None
        assert second.user.id == "2"
        assert second.user.role == Role.AGENT

    def test_stale_session_is_discarded(self, store):
        CredentialSessionManager(store)
        store.write(settings.session_key, json.dumps(
            {"id": "404", "name": "Ghost", "email": "ghost@igilife.com", "role": "admin"}
        ))
        manager = CredentialSessionManager(store)
        assert manager.user is None
        assert stored_session(store) is None

    def test_corrupt_collection_with_session_starts_logged_out(self, store):
        CredentialSessionManager(store).login("agent@igilife.com", DEMO_PASSWORD)
        store.write(settings.users_key, "not json")

        manager = CredentialSessionManager(store)
        assert manager.user is None
        assert manager.update_user_role(Role.ADMIN) is False
        assert store.read(settings.users_key) == "not json"

    def test_corrupt_collection_fails_closed(self, store):
        store.write(settings.users_key, "not json")
        manager = CredentialSessionManager(store)
        assert manager.login("admin@igilife.com", DEMO_PASSWORD) is False
        assert manager.get_all_users() == []
        assert manager.create_user({
            "name": "A", "email": "a@igilife.com", "role": "user", "password": "pw1234",
        }) is False
        assert store.read(settings.users_key) == "not json"


# ── Login / logout ────────────────────────────────────────────────────────────

class TestLogin:
    def test_login_success(self, manager):
        assert manager.login("admin@igilife.com", DEMO_PASSWORD) is True
        assert manager.is_authenticated
        assert manager.user.role == Role.ADMIN

    def test_email_is_case_insensitive(self, manager):
        assert manager.login("ADMIN@IgiLife.com", DEMO_PASSWORD) is True

    def test_password_is_exact(self, manager):
        assert manager.login("admin@igilife.com", "PASSWORD123") is False
        assert manager.user is None

    def test_unknown_email_fails(self, manager):
        assert manager.login("nobody@igilife.com", DEMO_PASSWORD) is False

    def test_empty_store_fails(self, store):
        store.write(settings.users_key, "[]")
        manager = CredentialSessionManager(store)
        assert manager.login("admin@igilife.com", DEMO_PASSWORD) is False

    def test_persisted_session_has_no_password(self, manager, store):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        session = stored_session(store)
        assert session["id"] == "2"
        assert "password" not in session
        assert "password" not in manager.user.model_dump()

    def test_logout_clears_session_and_is_idempotent(self, manager, store):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        manager.logout()
        manager.logout()
        assert manager.user is None
        assert stored_session(store) is None

    def test_retry_reproduces_decision(self, manager):
        assert manager.login("agent@igilife.com", "nope") is False
        assert manager.login("agent@igilife.com", "nope") is False


# ── Role & profile updates ────────────────────────────────────────────────────

class TestUpdateUserRole:
    def test_noop_when_logged_out(self, manager, store):
        before = stored_users(store)
        assert manager.update_user_role(Role.ADMIN) is False
        assert stored_users(store) == before

    def test_role_written_to_session_and_record(self, manager, store):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        assert manager.update_user_role(Role.USER) is True

        record = next(u for u in stored_users(store) if u["id"] == "2")
        assert record["role"] == "user"
        assert stored_session(store)["role"] == "user"
        assert manager.user.role == Role.USER

    def test_listener_sees_new_role(self, manager):
        seen = []
        manager.subscribe(lambda user: seen.append(user.role if user else None))
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        manager.update_user_role("admin")
        manager.logout()
        assert seen == [Role.AGENT, Role.ADMIN, None]

    def test_failed_session_write_keeps_record_unchanged(self, manager, store, monkeypatch):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        fail_writes_to(store, monkeypatch, settings.session_key)

        assert manager.update_user_role(Role.USER) is False
        record = next(u for u in stored_users(store) if u["id"] == "2")
        assert record["role"] == "agent"
        assert stored_session(store)["role"] == "agent"
        assert manager.user.role == Role.AGENT

    def test_missing_record_is_not_updated(self, manager, store):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        store.write(settings.users_key, json.dumps(
            [u for u in stored_users(store) if u["id"] != "2"]
        ))

        assert manager.update_user_role(Role.ADMIN) is False
        assert stored_session(store)["role"] == "agent"
        assert manager.user.role == Role.AGENT


class TestUpdateUserProfile:
    def test_false_when_logged_out(self, manager):
        assert manager.update_user_profile({"name": "X"}) is False

    def test_profile_merged_into_both_copies(self, manager, store):
        manager.login("client@igilife.com", DEMO_PASSWORD)
        ok = manager.update_user_profile(ProfileUpdate(name="Ahmed A. Ali", department="Retail"))
        assert ok is True

        record = next(u for u in stored_users(store) if u["id"] == "3")
        assert record["name"] == "Ahmed A. Ali"
        assert record["department"] == "Retail"
        assert record["password"] == DEMO_PASSWORD
        assert stored_session(store)["name"] == "Ahmed A. Ali"
        assert manager.user.department == "Retail"

    def test_duplicate_email_any_case_rejected(self, manager, store):
        manager.login("client@igilife.com", DEMO_PASSWORD)
        users_before = stored_users(store)
        session_before = stored_session(store)

        assert manager.update_user_profile({"email": "AGENT@igilife.com"}) is False
        assert stored_users(store) == users_before
        assert stored_session(store) == session_before

    def test_own_email_may_change(self, manager, store):
        manager.login("client@igilife.com", DEMO_PASSWORD)
        assert manager.update_user_profile({"email": "ahmed@igilife.com", "agentId": "CL-3"}) is True
        assert manager.user.email == "ahmed@igilife.com"
        assert manager.user.agent_id == "CL-3"
        assert manager.login("ahmed@igilife.com", DEMO_PASSWORD)

    def test_persistence_failure_reported_as_false(self, manager, monkeypatch):
        manager.login("client@igilife.com", DEMO_PASSWORD)

        def broken_write(key, value):
            raise StorageError(key, "disk full")

        monkeypatch.setattr(manager.store, "write", broken_write)
        assert manager.update_user_profile({"name": "New"}) is False
        assert manager.user.name == "Ahmed Ali"

    def test_failed_session_write_keeps_record_unchanged(self, manager, store, monkeypatch):
        manager.login("client@igilife.com", DEMO_PASSWORD)
        users_before = stored_users(store)
        fail_writes_to(store, monkeypatch, settings.session_key)

        assert manager.update_user_profile({"name": "New", "department": "Retail"}) is False
        assert stored_users(store) == users_before
        assert stored_session(store)["name"] == "Ahmed Ali"


# ── Administration ────────────────────────────────────────────────────────────

class TestCreateUser:
    def test_create_and_login(self, manager, store):
        ok = manager.create_user({
            "name": "New Agent",
            "email": "new.agent@igilife.com",
            "role": "agent",
            "password": "secret1",
            "agentId": "AGT009",
        })
        assert ok is True
        users = stored_users(store)
        assert len(users) == 4
        assert users[-1]["agentId"] == "AGT009"
        assert manager.login("new.agent@igilife.com", "secret1")

    def test_duplicate_email_rejected(self, manager, store):
        ok = manager.create_user({
            "name": "Impostor", "email": "Admin@IGILIFE.com", "role": "admin", "password": "x",
        })
        assert ok is False
        assert len(stored_users(store)) == 3

    def test_ids_are_unique(self, manager, monkeypatch):
        monkeypatch.setattr("igilife.services.session_manager._now_ms", lambda: 1)
        for i in range(3):
            assert manager.create_user({
                "name": f"U{i}", "email": f"u{i}@igilife.com", "role": "user", "password": "pw1234",
            })
        ids = [u.id for u in manager.get_all_users()]
        assert ids == ["1", "2", "3", "4", "5", "6"]

    def test_invalid_payload_rejected(self, manager):
        assert manager.create_user({"email": "missing-fields@igilife.com"}) is False


class TestGetAllUsers:
    def test_passwords_stripped_and_order_kept(self, manager):
        users = manager.get_all_users()
        assert [u.id for u in users] == ["1", "2", "3"]
        for u in users:
            assert "password" not in u.dump()

    def test_storage_round_trip_keeps_passwords(self, store, manager):
        records = CredentialList.validate_json(store.read(settings.users_key))
        assert all(r.password == DEMO_PASSWORD for r in records)


class TestDeleteUser:
    def test_delete_other_user(self, manager, store):
        manager.login("admin@igilife.com", DEMO_PASSWORD)
        assert manager.delete_user("3") is True
        assert [u["id"] for u in stored_users(store)] == ["1", "2"]
        assert manager.user.id == "1"

    def test_delete_unknown_returns_false(self, manager):
        assert manager.delete_user("999") is False

    def test_deleting_session_owner_logs_out(self, manager, store):
        manager.login("agent@igilife.com", DEMO_PASSWORD)
        assert manager.delete_user("2") is True
        assert manager.user is None
        assert stored_session(store) is None
