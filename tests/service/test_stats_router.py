"""Unit tests for the stats API router (/api/stats)."""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from emulator.simulation.engine import EmulatorEngine
from service.routers.stats import router


def _make_app(engine=None):
    app = FastAPI()
    app.include_router(router)
    app.state.engine = engine
    return app


@pytest.mark.unit
class TestStats:
    """GET /api/stats"""

    def test_stats(self):
        engine = EmulatorEngine(seed=4)
        engine.build_scenario("contested-maritime")
        client = TestClient(_make_app(engine))
        resp = client.get("/api/stats")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 80
        assert data["scenario"] == "contested-maritime"
        assert data["by_domain"] == {"AIR": 24, "MARITIME": 36, "LAND": 20}
        assert data["by_disposition"]["UNKNOWN"] == 0
        assert data["last_update"] is not None

    def test_503_without_engine(self):
        client = TestClient(_make_app(None))
        assert client.get("/api/stats").status_code == 503
