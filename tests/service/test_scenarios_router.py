"""Unit tests for the scenario API router (/api/scenarios)."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from emulator.simulation.engine import EmulatorEngine
from emulator.simulation.scenario import SCENARIOS
from service.routers.scenarios import router


def _make_app(engine=None):
    app = FastAPI()
    app.include_router(router)
    app.state.engine = engine
    return app


@pytest.mark.unit
class TestListScenarios:
    """GET /api/scenarios"""

    def test_lists_builtins(self):
        engine = EmulatorEngine(seed=1)
        engine.build_scenario("stress-tiny")
        client = TestClient(_make_app(engine))
        resp = client.get("/api/scenarios")
        assert resp.status_code == 200
        data = resp.json()
        assert data["current"] == "stress-tiny"
        ids = {s["id"] for s in data["scenarios"]}
        assert ids == set(SCENARIOS)
        tiny = next(s for s in data["scenarios"] if s["id"] == "stress-tiny")
        assert tiny == {"id": "stress-tiny", "name": "Stress Test (Tiny)", "total_entities": 100}

    def test_503_without_engine(self):
        client = TestClient(_make_app(None))
        assert client.get("/api/scenarios").status_code == 503


@pytest.mark.unit
class TestSwitchScenario:
    """POST /api/scenarios/{key}"""

    def test_switch(self):
        engine = EmulatorEngine(seed=2)
        engine.build_scenario("stress-tiny")
        client = TestClient(_make_app(engine))
        resp = client.post("/api/scenarios/contested-maritime")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "scenario": "contested-maritime", "entity_count": 80}
        assert engine.scenario_key == "contested-maritime"

    def test_unknown_rejected(self):
        engine = MagicMock()
        engine.scenarios.return_value = list(SCENARIOS.values())
        client = TestClient(_make_app(engine))
        resp = client.post("/api/scenarios/bogus")
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["error"] == "Invalid scenario"
        assert set(detail["available"]) == set(SCENARIOS)
        engine.build_scenario.assert_not_called()
