"""Request-scoped dependencies."""

from __future__ import annotations

from fastapi import Request

from ..services.container import PoolServices


def get_services(request: Request) -> PoolServices:
    """FastAPI dependency that returns the app's shared service objects."""

    return request.app.state.services


__all__ = ["get_services"]
