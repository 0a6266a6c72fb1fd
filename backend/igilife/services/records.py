"""
Record collections — the shared storage discipline for portal records.

Each collection lives under its own store key as one JSON array. Ids are
the only uniqueness constraint. Reads that hit a storage fault come back
empty; writes come back as None/False. Neither raises to the caller.
"""

import logging
import time
from uuid import uuid4

from pydantic import BaseModel, TypeAdapter, ValidationError

from igilife.errors import StorageError
from igilife.services.store import PersistedStore

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """`<millisecond timestamp>_<9 hex chars>`"""
    return f"{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class RecordCollection:
    """CRUD over one list of `record_model` values kept under `key`."""

    record_model: type[BaseModel]
    create_model: type[BaseModel]
    update_model: type[BaseModel]
    label = "record"

    def __init__(self, store: PersistedStore, key: str):
        self.store = store
        self.key = key
        self._codec = TypeAdapter(list[self.record_model])

    def _seed(self) -> list[BaseModel]:
        return []

    # ── Storage ──

    def _load(self) -> list[BaseModel]:
        raw = self.store.read(self.key)
        if raw is None:
            records = self._seed()
            self._save(records)
            logger.info("Initialised %s with %d %ss", self.key, len(records), self.label)
            return records
        try:
            return self._codec.validate_json(raw)
        except ValidationError as e:
            raise StorageError(self.key, f"undecodable {self.label} collection ({e.error_count()} errors)") from e

    def _save(self, records: list[BaseModel]) -> None:
        self.store.write(self.key, self._codec.dump_json(records, by_alias=True).decode())
        logger.debug("%s records persisted: %d records", self.label, len(records))

    # ── Reads ──

    def records(self) -> list[BaseModel]:
        try:
            return self._load()
        except StorageError:
            logger.exception("Failed to load %ss", self.label)
            return []

    def get(self, record_id: str) -> BaseModel | None:
        return next((r for r in self.records() if r.id == record_id), None)

    # ── Writes ──

    def _parse_new(self, data: BaseModel | dict) -> BaseModel | None:
        if not isinstance(data, dict):
            return data
        try:
            return self.create_model.model_validate(data)
        except ValidationError as e:
            logger.info("Rejected new %s: %d invalid fields", self.label, e.error_count())
            return None

    def _append(self, record: BaseModel) -> BaseModel | None:
        try:
            records = self._load()
            records.append(record)
            self._save(records)
        except StorageError:
            logger.exception("Failed to add %s %s", self.label, record.id)
            return None
        logger.info("%s added: %s", self.label, record.id)
        return record

    def _apply(self, record_id: str, updates: dict) -> bool:
        try:
            records = self._load()
            idx = next((i for i, r in enumerate(records) if r.id == record_id), None)
            if idx is None:
                return False
            records[idx] = records[idx].model_copy(update=updates)
            self._save(records)
        except StorageError:
            logger.exception("Failed to update %s %s", self.label, record_id)
            return False
        logger.info("%s updated: %s", self.label, record_id)
        return True

    def update(self, record_id: str, changes: BaseModel | dict) -> bool:
        """Merge the set fields of `changes` into one record."""
        if isinstance(changes, dict):
            try:
                changes = self.update_model.model_validate(changes)
            except ValidationError:
                logger.info("Rejected %s update for %s: invalid fields", self.label, record_id)
                return False
        return self._apply(record_id, changes.model_dump(exclude_unset=True, exclude_none=True))

    def delete(self, record_id: str) -> bool:
        try:
            records = self._load()
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._save(remaining)
        except StorageError:
            logger.exception("Failed to delete %s %s", self.label, record_id)
            return False
        logger.info("%s deleted: %s", self.label, record_id)
        return True
