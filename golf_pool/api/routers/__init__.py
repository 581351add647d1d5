"""Aggregate API routers."""

from fastapi import APIRouter

from .client import router as client_router
from .leaderboard import router as leaderboard_router
from .standings import router as standings_router
from .system import router as system_router
from .tournament import router as tournament_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    leaderboard_router,
    standings_router,
    tournament_router,
    client_router,
)

__all__ = ["ALL_ROUTERS"]
