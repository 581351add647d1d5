"""Signals from the dashboard page and refresh status."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from ...services.container import PoolServices
from ..deps import get_services

router = APIRouter(prefix="/api", tags=["client"])


@router.post("/client/focus")
async def client_focus(services: PoolServices = Depends(get_services)) -> Dict[str, Any]:
    """The page regained focus; refresh unless it is hidden."""

    result = await services.polling.on_focus()
    return {
        "refreshed": result is not None,
        "source": result.source_tag if result else None,
    }


@router.post("/client/visibility")
def client_visibility(
    body: Dict[str, Any], services: PoolServices = Depends(get_services)
) -> Dict[str, Any]:
    visible = body.get("visible")
    if not isinstance(visible, bool):
        raise HTTPException(400, "visible must be true or false")
    services.polling.set_visible(visible)
    return {"ok": True, "visible": visible}


@router.get("/status")
def get_status(services: PoolServices = Depends(get_services)) -> Dict[str, Any]:
    """Selector state, retry schedule and polling cadence."""

    return {
        "selector": services.selector.status(),
        "polling": services.polling.status(),
    }


__all__ = ["router"]
