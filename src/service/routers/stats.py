"""Statistics API."""

from __future__ import annotations

from fastapi import APIRouter, Request

from service.deps import get_engine

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
async def get_stats(request: Request):
    """Totals by domain, disposition and emitter type."""
    return get_engine(request).stats()
