"""Scenario API -- list scenarios, switch the live population."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from service.deps import get_engine

router = APIRouter(prefix="/api/scenarios", tags=["scenarios"])


@router.get("")
async def list_scenarios(request: Request):
    engine = get_engine(request)
    return {
        "current": engine.scenario_key,
        "scenarios": [
            {"id": s.key, "name": s.name, "total_entities": s.total_entities}
            for s in engine.scenarios()
        ],
    }


@router.post("/{key}")
async def switch_scenario(key: str, request: Request):
    """Rebuild the population from *key*.  Unknown keys are rejected here
    even though the engine itself would fall back to its default."""
    engine = get_engine(request)
    available = [s.key for s in engine.scenarios()]
    if key not in available:
        raise HTTPException(400, {"error": "Invalid scenario", "available": available})
    scenario = engine.build_scenario(key)
    return {
        "success": True,
        "scenario": scenario.key,
        "entity_count": engine.entity_count(),
    }
