"""Entity API -- live-world-model views of the current population."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, Request

from emulator.simulation.entity import Entity, now_ms
from service.deps import get_engine

router = APIRouter(prefix="/api", tags=["entities"])

ORIGIN_UUID = "entity_emulator"
HISTORY_MS = 3_600_000  # initial_timestamp is reported one hour back


def to_live_world_model(entity: Entity) -> dict:
    """Serialize one entity as a live-world-model record.

    The record and group UUIDs are fresh on every call; ``entity_msg_uuid``
    is the stable entity id.
    """
    record = entity.to_dict()
    return {
        "liveworldmodel_uuid": str(uuid.uuid4()),
        "entity_msg_uuid": entity.entity_id,
        "origin_uuid": ORIGIN_UUID,
        "position": record["position"],
        "frequency_range": record["frequency_range"],
        "write_timestamp": now_ms(),
        "initial_timestamp": entity.latest_timestamp - HISTORY_MS,
        "latest_timestamp": entity.latest_timestamp,
        "entity_name": entity.name,
        "entity_type": entity.entity_type,
        "mil_view": record["mil_view"],
        "group_uuid": str(uuid.uuid4()),
        "origin": "simulated",
        "summary": f"{entity.platform_type} - {entity.callsign}",
        "primary_designator": entity.callsign,
        "secondary_designator": entity.platform_type,
        "domain": entity.domain.value,
        "heading": entity.heading,
        "speed": entity.speed,
        "emitter_type": entity.emitter_type.value,
    }


def _results(request: Request) -> dict:
    engine = get_engine(request)
    results = engine.snapshot(to_live_world_model)
    return {"results": results, "count": len(results)}


@router.get("/liveWorldModel")
async def live_world_model(request: Request):
    """Every entity in live-world-model format."""
    return _results(request)


@router.get("/entities")
async def list_entities(request: Request):
    return _results(request)


@router.get("/entities/getLatest")
async def latest_entities(request: Request):
    return _results(request)


@router.get("/entities/{entity_id}")
async def get_entity(entity_id: str, request: Request):
    engine = get_engine(request)
    record = engine.snapshot_entity(entity_id, to_live_world_model)
    if record is None:
        raise HTTPException(404, "Entity not found")
    return record
