# medcon/common/database/storage.py
"""
Key-value storage collaborators.

The clinic core only needs ``load(key)`` and ``save(key, value)`` over
JSON-serializable values. ``InMemoryStore`` backs tests and throwaway
sessions; ``SqlKeyValueStore`` keeps one row per key in the
``stored_collections`` table.
"""

import json
from typing import Any, Callable, Dict, Optional, Protocol

from sqlalchemy.orm import Session

from medcon.models.models import StoredCollection


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[Any]:
        ...

    def save(self, key: str, value: Any) -> None:
        ...


class InMemoryStore:
    """Dictionary-backed store. Values are copied through JSON like a real store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def keys(self):
        return list(self._data.keys())


class SqlKeyValueStore:
    """Store backed by the ``stored_collections`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load(self, key: str) -> Optional[Any]:
        with self.session_factory() as session:
            row = session.get(StoredCollection, key)
            return row.value if row is not None else None

    def save(self, key: str, value: Any) -> None:
        with self.session_factory() as session:
            try:
                row = session.get(StoredCollection, key)
                if row is None:
                    session.add(StoredCollection(key=key, value=value))
                else:
                    row.value = value
                session.commit()
            except Exception:
                session.rollback()
                raise
