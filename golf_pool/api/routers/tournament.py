"""Tournament schedule endpoint."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...services.container import PoolServices
from ..deps import get_services

router = APIRouter(prefix="/api", tags=["tournament"])


@router.get("/tournament")
def get_tournament(services: PoolServices = Depends(get_services)) -> Dict[str, Any]:
    return services.calendar.info()


__all__ = ["router"]
