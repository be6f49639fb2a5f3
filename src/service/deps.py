"""Shared request helpers for the routers."""

from __future__ import annotations

from fastapi import HTTPException, Request

from emulator.simulation.engine import EmulatorEngine


def get_engine(request: Request) -> EmulatorEngine:
    """Retrieve the EmulatorEngine from app state."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(503, "Emulator engine not available")
    return engine
