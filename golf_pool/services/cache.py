"""Timestamped key-value cache with age-based expiry."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ..core.time import now_ms, utcnow
from ..models import CacheRecord

logger = logging.getLogger(__name__)

# Passing this as max_age returns the stored entry however old it is.
IGNORE_AGE = 0


class MemoryStorage:
    """In-process storage backend, used by tests and throwaway deployments."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def write(self, key: str, raw: str) -> None:
        self._items[key] = raw

    def delete(self, key: str) -> None:
        self._items.pop(key, None)


class SqlStorage:
    """Storage backend persisted in the ``cache_entry`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def read(self, key: str) -> Optional[str]:
        with Session(self._engine) as session:
            record = session.get(CacheRecord, key)
            return record.value if record else None

    def write(self, key: str, raw: str) -> None:
        with Session(self._engine) as session:
            record = session.get(CacheRecord, key)
            if record:
                record.value = raw
                record.updated_at = utcnow()
            else:
                record = CacheRecord(key=key, value=raw)
            session.add(record)
            session.commit()

    def delete(self, key: str) -> None:
        with Session(self._engine) as session:
            record = session.get(CacheRecord, key)
            if record:
                session.delete(record)
                session.commit()


@dataclass(frozen=True)
class CacheHit:
    data: Any
    timestamp: int
    age: int
    source: str


class ScoreCache:
    """Keeps the most recent successful payload per logical key.

    Entries are stored as ``{"data", "timestamp", "source"}`` JSON envelopes.
    ``get`` with ``max_age=0`` ignores expiry entirely; it backs the
    last-resort read when every live source is down. Anything that cannot
    be decoded is reported as a miss.
    """

    def __init__(self, storage, clock: Callable[[], int] = now_ms) -> None:
        self._storage = storage
        self._clock = clock

    def set(self, key: str, data: Any, source: str) -> None:
        envelope = {"data": data, "timestamp": self._clock(), "source": source}
        self._storage.write(key, json.dumps(envelope))
        logger.debug("Cached %s from %s", key, source)

    def get(self, key: str, max_age: float) -> Optional[CacheHit]:
        raw = self._storage.read(key)
        if raw is None:
            return None

        try:
            envelope = json.loads(raw)
            data = envelope["data"]
            timestamp = int(envelope["timestamp"])
            source = str(envelope.get("source") or "unknown")
        except (ValueError, TypeError, KeyError, OverflowError) as exc:
            logger.warning("Ignoring corrupt cache entry for %s: %s", key, exc)
            return None

        age = self._clock() - timestamp
        if max_age > 0 and not math.isinf(max_age) and age > max_age:
            logger.debug("Cache for %s is expired (%ss old)", key, round(age / 1000))
            return None

        return CacheHit(data=data, timestamp=timestamp, age=age, source=source)

    def clear(self, key: str) -> None:
        self._storage.delete(key)


__all__ = ["CacheHit", "IGNORE_AGE", "MemoryStorage", "ScoreCache", "SqlStorage"]
