"""HTTP layer for the pool dashboard."""

from __future__ import annotations

from typing import Iterable

from fastapi import APIRouter, FastAPI

from .routers import ALL_ROUTERS


def register_routes(app: FastAPI, routers: Iterable[APIRouter] = ALL_ROUTERS) -> None:
    """Mount the dashboard routers (system, leaderboard, standings, tournament, client)."""

    for router in routers:
        app.include_router(router)


__all__ = ["register_routes"]
