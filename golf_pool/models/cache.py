"""Database model for persisted cache entries."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class CacheRecord(SQLModel, table=True):
    """Latest serialized cache envelope for one logical key."""

    __tablename__ = "cache_entry"

    key: str = ORMField(primary_key=True)
    value: str
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["CacheRecord"]
