"""Unit tests for scenarios and ScenarioBuilder (src/emulator/simulation/scenario.py)."""

from __future__ import annotations

import json
import random
from collections import Counter
from unittest.mock import patch

import pytest

from emulator.domains import Affiliation, Domain
from emulator.geo.catalog import SCENARIO_BOUNDS
from emulator.simulation.factory import EntityFactory
from emulator.simulation.scenario import (
    DEFAULT_SCENARIO,
    SCENARIOS,
    EntityCounts,
    ScenarioBuilder,
    ScenarioConfig,
    load_scenarios,
)

pytestmark = pytest.mark.unit


def _builder(seed: int = 0, **kwargs) -> ScenarioBuilder:
    return ScenarioBuilder(factory=EntityFactory(rng=random.Random(seed)), **kwargs)


class TestCatalog:
    @pytest.mark.parametrize("key,total", [
        ("stress-tiny", 100),
        ("stress-small", 600),
        ("stress-medium", 3000),
        ("stress-large", 6000),
        ("stress-extreme", 15000),
        ("contested-maritime", 80),
    ])
    def test_totals(self, key, total):
        assert SCENARIOS[key].total_entities == total

    def test_default(self):
        assert DEFAULT_SCENARIO == "stress-small"

    def test_categories_order(self):
        cats = [(d, a) for d, a, _ in EntityCounts().categories()]
        assert cats == [
            (Domain.AIR, Affiliation.FRIENDLY),
            (Domain.MARITIME, Affiliation.FRIENDLY),
            (Domain.LAND, Affiliation.FRIENDLY),
            (Domain.AIR, Affiliation.HOSTILE),
            (Domain.MARITIME, Affiliation.HOSTILE),
            (Domain.LAND, Affiliation.HOSTILE),
            (Domain.AIR, Affiliation.NEUTRAL),
            (Domain.MARITIME, Affiliation.NEUTRAL),
        ]

    def test_to_dict(self):
        d = SCENARIOS["stress-tiny"].to_dict()
        assert d["id"] == "stress-tiny"
        assert d["total_entities"] == 100
        assert d["entity_counts"]["hostile_maritime"] == 20


class TestBuild:
    def test_stress_tiny_counts(self):
        entities = _builder(1).build("stress-tiny")
        assert len(entities) == 100
        counts = Counter((e.domain, e.affiliation) for e in entities)
        assert counts[(Domain.AIR, Affiliation.FRIENDLY)] == 10
        assert counts[(Domain.MARITIME, Affiliation.HOSTILE)] == 20
        assert counts[(Domain.MARITIME, Affiliation.NEUTRAL)] == 10
        assert counts[(Domain.LAND, Affiliation.NEUTRAL)] == 0

    def test_stress_small_counts(self):
        entities = _builder(2).build("stress-small")
        assert len(entities) == 600
        counts = Counter((e.domain, e.affiliation) for e in entities)
        for domain, side, n in SCENARIOS["stress-small"].entity_counts.categories():
            assert counts[(domain, side)] == n

    def test_build_order(self):
        entities = _builder(3).build("stress-tiny")
        assert all(e.domain is Domain.AIR and e.affiliation is Affiliation.FRIENDLY for e in entities[:10])
        assert all(e.domain is Domain.MARITIME and e.affiliation is Affiliation.NEUTRAL for e in entities[-10:])

    def test_names_unique(self):
        entities = _builder(4).build("stress-small")
        names = [e.name for e in entities]
        assert len(set(names)) == len(names)

    def test_names_unique_across_rebuild(self):
        builder = _builder(5)
        builder.build("stress-tiny")
        entities = builder.build("stress-tiny")
        names = [e.name for e in entities]
        assert len(set(names)) == len(names)
        # pool was cleared, so it only holds this build's names
        assert len(builder.factory.oracle.pool) == len(entities)

    def test_all_in_bounds(self):
        for e in _builder(6).build("contested-maritime"):
            assert SCENARIO_BOUNDS.contains(e.position.latitude, e.position.longitude)

    def test_unknown_key_falls_back(self):
        builder = _builder(7)
        with patch("emulator.simulation.scenario.logger") as mock_logger:
            entities = builder.build("no-such-scenario")
        assert len(entities) == 600
        mock_logger.warning.assert_called_once()

    def test_resolve(self):
        builder = _builder(8)
        assert builder.resolve("stress-tiny").key == "stress-tiny"
        assert builder.resolve("bogus").key == DEFAULT_SCENARIO

    def test_extra_scenarios(self):
        extra = {"drill": ScenarioConfig("drill", "Drill", EntityCounts(friendly_maritime=3))}
        builder = _builder(9, scenarios=extra)
        entities = builder.build("drill")
        assert len(entities) == 3
        assert "stress-tiny" in builder.scenarios

    def test_missing_default_rejected(self):
        with pytest.raises(ValueError):
            _builder(10, default_key="nope")


class TestLoadScenarios:
    def test_load(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps({
            "drill": {"name": "Harbor Drill", "entity_counts": {"friendly_maritime": 12, "hostile_air": 4}},
        }))
        result = load_scenarios(path)
        drill = result["drill"]
        assert drill.name == "Harbor Drill"
        assert drill.total_entities == 16
        assert drill.entity_counts.friendly_land == 0

    def test_name_defaults_to_key(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"quiet": {}}))
        assert load_scenarios(path)["quiet"].name == "quiet"
        assert load_scenarios(path)["quiet"].total_entities == 0

    @pytest.mark.parametrize("payload", [
        [1, 2, 3],
        {"bad": [1]},
        {"bad": {"entity_counts": {"neutral_land": 5}}},
        {"bad": {"entity_counts": {"hostile_air": -1}}},
        {"bad": {"entity_counts": []}},
        {"bad": {"entity_counts": {"hostile_air": 2.7}}},
        {"bad": {"entity_counts": {"hostile_air": True}}},
        {"bad": {"entity_counts": {"hostile_air": "4"}}},
    ])
    def test_malformed(self, tmp_path, payload):
        path = tmp_path / "s.json"
        path.write_text(json.dumps(payload))
        with pytest.raises(ValueError):
            load_scenarios(path)
