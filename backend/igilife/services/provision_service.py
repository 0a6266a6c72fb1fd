"""
User services — insurance services requested by or provided to a user.

A user holds at most one service per (service type, service name); a
second request for the same pair is rejected and the first one stands.
"""

import logging
from datetime import datetime, timezone

from igilife.config import settings
from igilife.schemas.user_services import ServiceStatus, UserService, UserServiceCreate, UserServiceUpdate
from igilife.services.records import RecordCollection, generate_id
from igilife.services.store import PersistedStore

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserServiceManager(RecordCollection):
    record_model = UserService
    create_model = UserServiceCreate
    update_model = UserServiceUpdate
    label = "user service"

    def __init__(self, store: PersistedStore, *, key: str | None = None):
        super().__init__(store, key or settings.user_services_key)

    def list_services(self) -> list[UserService]:
        return self.records()

    def for_user(self, user_id: str) -> list[UserService]:
        return [s for s in self.records() if s.user_id == user_id]

    def add(self, data: UserServiceCreate | dict) -> UserService | None:
        """
        Record a service for a user. None when a required field is
        missing, the user already has this service, or the store fails.
        """
        data = self._parse_new(data)
        if data is None:
            return None

        existing = self.for_user(data.user_id)
        if any(s.service_type == data.service_type and s.service_name == data.service_name for s in existing):
            logger.warning(
                "Duplicate service request for user %s: %s / %s",
                data.user_id, data.service_type, data.service_name,
            )
            return None

        return self._append(UserService(
            id=generate_id(),
            request_date=_now_iso(),
            **data.model_dump(),
        ))

    def set_status(self, service_id: str, status: ServiceStatus | str) -> bool:
        return self._apply(service_id, {"status": ServiceStatus(status)})
