"""In-memory store for outfit sessions."""

import logging
import threading
from collections import OrderedDict
from typing import Protocol
from uuid import uuid4

from event_outfitter.domain.sessions import SessionRecord

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Storage interface for outfit sessions."""

    def create(self, record: SessionRecord) -> str:
        """Store a record under a fresh identifier and return the identifier."""

    def get(self, session_id: str) -> SessionRecord | None:
        """Return the record for an identifier, if present."""

    def discard(self, session_id: str) -> None:
        """Remove a record if present."""


class InMemorySessionStore(SessionStore):
    """Process-local session store bounded by an LRU capacity.

    A single lock serializes access to the mapping. It is held for the map
    operation only.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be positive or None")
        self._capacity = capacity
        self._records: OrderedDict[str, SessionRecord] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def create(self, record: SessionRecord) -> str:
        """Insert a record and evict the least recently used ones over capacity."""
        session_id = str(uuid4())
        evicted: list[str] = []
        with self._lock:
            self._records[session_id] = record
            if self._capacity is not None:
                while len(self._records) > self._capacity:
                    oldest, _ = self._records.popitem(last=False)
                    evicted.append(oldest)
        for oldest in evicted:
            logger.info("Evicted session %s", oldest)
        return session_id

    def get(self, session_id: str) -> SessionRecord | None:
        """Return the record and mark it as recently used."""
        with self._lock:
            record = self._records.get(session_id)
            if record is not None:
                self._records.move_to_end(session_id)
            return record

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
