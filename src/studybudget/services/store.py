import threading
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from pydantic import BaseModel

from studybudget.logger import get_logger

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordNotFoundError(KeyError):
    def __init__(self, record_id: str) -> None:
        super().__init__(record_id)
        self.record_id = record_id


class DuplicateRecordError(ValueError):
    pass


class RecordStore(Generic[RecordT]):
    """
    In-memory records keyed by id, kept in insertion order.

    Readers get a copy of the list from ``snapshot()``; the store itself is only
    changed through ``add``, ``update`` and ``remove``.
    """

    def __init__(self, name: str, records: Iterable[RecordT] | None = None) -> None:
        self.name = name
        self._records: dict[str, RecordT] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.add(record)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def snapshot(self) -> list[RecordT]:
        with self._lock:
            return list(self._records.values())

    def get(self, record_id: str) -> RecordT:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def add(self, record: RecordT) -> RecordT:
        with self._lock:
            if record.id in self._records:
                raise DuplicateRecordError(f"{self.name} record {record.id} already exists")
            self._records[record.id] = record
        logger.debug("[STORE] Added %s record %s.", self.name, record.id)
        return record

    def update(self, record_id: str, record: RecordT) -> RecordT:
        with self._lock:
            if record_id not in self._records:
                raise RecordNotFoundError(record_id)
            if record.id != record_id:
                record = record.model_copy(update={"id": record_id})
            self._records[record_id] = record
        logger.debug("[STORE] Updated %s record %s.", self.name, record_id)
        return record

    def modify(self, record_id: str, change: Callable[[RecordT], RecordT]) -> RecordT:
        """Replace a record with ``change(current)`` without releasing the lock in between."""
        with self._lock:
            try:
                current = self._records[record_id]
            except KeyError:
                raise RecordNotFoundError(record_id) from None
            record = change(current)
            if record.id != record_id:
                record = record.model_copy(update={"id": record_id})
            self._records[record_id] = record
        logger.debug("[STORE] Modified %s record %s.", self.name, record_id)
        return record

    def remove(self, record_id: str) -> RecordT:
        with self._lock:
            try:
                record = self._records.pop(record_id)
            except KeyError:
                raise RecordNotFoundError(record_id) from None
        logger.debug("[STORE] Removed %s record %s.", self.name, record_id)
        return record

    def clear(self) -> int:
        with self._lock:
            cleared = len(self._records)
            self._records.clear()
        return cleared
