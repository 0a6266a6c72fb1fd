"""
Persisted Store — durable key/value text storage.

Each key holds one encoded document (a JSON array or object). Writes are
last-writer-wins and atomic per key; there is no cross-key transaction.
"""

import logging

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from igilife.errors import StorageError
from igilife.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class PersistedStore:
    """Key/value store backed by the `kv_store` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def read(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                return session.execute(
                    select(KeyValueEntry.value).where(KeyValueEntry.key == key)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Store read failed for key %s: %s", key, e, extra={"store_key": key})
            raise StorageError(key, "read failed") from e

    def write(self, key: str, value: str) -> None:
        try:
            with self._session_factory.begin() as session:
                session.merge(KeyValueEntry(key=key, value=value))
        except SQLAlchemyError as e:
            logger.error("Store write failed for key %s: %s", key, e, extra={"store_key": key})
            raise StorageError(key, "write failed") from e

    def remove(self, key: str) -> None:
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
        except SQLAlchemyError as e:
            logger.error("Store remove failed for key %s: %s", key, e, extra={"store_key": key})
            raise StorageError(key, "remove failed") from e

    def ping(self) -> bool:
        try:
            with self._session_factory() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
