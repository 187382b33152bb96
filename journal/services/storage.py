"""Key-value persistence for the journal's named JSON blobs.

The core talks to storage only through ``load``/``save``/``delete`` on string
blobs keyed by name ("trades", "user", "settings", "drafts", "templates").
A missing key means an empty collection, never an error.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Protocol

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from journal.errors import StorageError
from journal.models.blob import StoredBlob

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, blob: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def load(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def save(self, key: str, blob: str) -> None:
        with self._lock:
            self._data[key] = blob

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)


class SQLStore:
    """Blob store on top of the stored_blob table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def load(self, key: str) -> str | None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredBlob, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load blob '{key}': {e}")
            raise StorageError(f"Could not load '{key}'") from e

    def save(self, key: str, blob: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredBlob, key)
                if row is None:
                    row = StoredBlob(key=key, value=blob)
                else:
                    row.value = blob
                    row.updated_at = datetime.now(timezone.utc)
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save blob '{key}': {e}")
            raise StorageError(f"Could not save '{key}'") from e

    def delete(self, key: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredBlob, key)
                if row is not None:
                    session.delete(row)
                    session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete blob '{key}': {e}")
            raise StorageError(f"Could not delete '{key}'") from e


def load_blob(store: KeyValueStore, key: str, adapter: TypeAdapter, default):
    """Load and decode one blob; an absent key yields ``default``."""
    raw = store.load(key)
    if raw is None:
        return default
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise StorageError(f"Stored '{key}' is unreadable: {e.error_count()} error(s)") from e


def save_blob(store: KeyValueStore, key: str, adapter: TypeAdapter, value) -> None:
    try:
        raw = adapter.dump_json(value, by_alias=True)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Could not serialize '{key}'") from e
    store.save(key, raw.decode("utf-8"))
