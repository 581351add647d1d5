"""Database configuration for the persistent cache store."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL


def make_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine, making sure a local SQLite file has a directory to live in."""

    if not url.startswith("sqlite"):
        return create_engine(url)

    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database.
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )

    Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False})


def init_db(engine: Engine) -> None:
    # Registers the cache_entry table before creating it.
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


__all__ = ["init_db", "make_engine"]
