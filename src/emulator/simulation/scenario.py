"""Scenarios -- named per-category entity counts and the population builder.

A scenario is eight counts: {friendly, hostile, neutral} x {air, maritime,
land}, minus neutral-land.  ScenarioBuilder expands one into a population
by calling EntityFactory once per entity in a fixed category order, after
clearing the naming pool.

Usage:
    builder = ScenarioBuilder()
    entities = builder.build("stress-tiny")

Extra scenarios can be loaded from JSON:
    {
      "drill": {
        "name": "Harbor Drill",
        "entity_counts": {"friendly_maritime": 12, "hostile_air": 4}
      }
    }
Missing categories default to 0.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from emulator.domains import Affiliation, Domain
from emulator.simulation.entity import Entity
from emulator.simulation.factory import EntityFactory


@dataclass(frozen=True)
class EntityCounts:
    """Per-category entity counts, declared in build order."""

    friendly_air: int = 0
    friendly_maritime: int = 0
    friendly_land: int = 0
    hostile_air: int = 0
    hostile_maritime: int = 0
    hostile_land: int = 0
    neutral_air: int = 0
    neutral_maritime: int = 0

    @property
    def total(self) -> int:
        return sum(count for _, _, count in self.categories())

    def categories(self) -> Iterator[tuple[Domain, Affiliation, int]]:
        """Yield (domain, affiliation, count) in build order."""
        for f in fields(self):
            side, domain = f.name.split("_", 1)
            yield Domain(domain.upper()), Affiliation(side.upper()), getattr(self, f.name)

    def to_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ScenarioConfig:
    """A named scenario definition."""

    key: str
    name: str
    entity_counts: EntityCounts

    @property
    def total_entities(self) -> int:
        return self.entity_counts.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.key,
            "name": self.name,
            "total_entities": self.total_entities,
            "entity_counts": self.entity_counts.to_dict(),
        }


def _scenario(key: str, name: str, *counts: int) -> ScenarioConfig:
    return ScenarioConfig(key, name, EntityCounts(*counts))


SCENARIOS: dict[str, ScenarioConfig] = {
    s.key: s for s in (
        _scenario("stress-tiny", "Stress Test (Tiny)", 10, 15, 10, 15, 20, 15, 5, 10),
        _scenario("stress-small", "Stress Test (Small)", 50, 80, 50, 80, 120, 80, 40, 100),
        _scenario("stress-medium", "Stress Test (Medium)", 250, 400, 250, 400, 600, 400, 200, 500),
        _scenario("stress-large", "Stress Test (Large)", 500, 800, 500, 800, 1200, 800, 400, 1000),
        _scenario("stress-extreme", "Stress Test (Extreme)", 1250, 2000, 1250, 2000, 3000, 2000, 1000, 2500),
        _scenario("contested-maritime", "Contested Maritime (South China Sea)", 8, 12, 8, 12, 18, 12, 4, 6),
    )
}

DEFAULT_SCENARIO = "stress-small"


def load_scenarios(path: str | Path) -> dict[str, ScenarioConfig]:
    """Load scenario definitions from a JSON file.

    Raises ValueError/KeyError/TypeError on malformed content; the caller
    decides whether that is fatal.
    """
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scenario file {path} must hold a JSON object")

    known = {f.name for f in fields(EntityCounts)}
    result: dict[str, ScenarioConfig] = {}
    for key, spec in data.items():
        if not isinstance(spec, dict):
            raise ValueError(f"Scenario '{key}' must be a JSON object")
        counts = spec.get("entity_counts", {})
        if not isinstance(counts, dict):
            raise ValueError(f"Scenario '{key}': entity_counts must be a JSON object")
        unknown = set(counts) - known
        if unknown:
            raise ValueError(f"Scenario '{key}': unknown categories {sorted(unknown)}")
        for category, value in counts.items():
            # bool is an int subclass; reject it along with floats and strings
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Scenario '{key}': {category} must be an integer")
            if value < 0:
                raise ValueError(f"Scenario '{key}': counts must be non-negative")
        result[key] = ScenarioConfig(
            key=key,
            name=spec.get("name", key),
            entity_counts=EntityCounts(**counts),
        )
    return result


class ScenarioBuilder:
    """Expands a scenario key into a freshly named entity population."""

    def __init__(
        self,
        factory: EntityFactory | None = None,
        scenarios: dict[str, ScenarioConfig] | None = None,
        default_key: str = DEFAULT_SCENARIO,
    ) -> None:
        self.factory = factory if factory is not None else EntityFactory()
        self.scenarios: dict[str, ScenarioConfig] = dict(SCENARIOS)
        if scenarios:
            self.scenarios.update(scenarios)
        if default_key not in self.scenarios:
            raise ValueError(f"Default scenario '{default_key}' is not defined")
        self.default_key = default_key

    def resolve(self, key: str) -> ScenarioConfig:
        """Look up *key*, falling back to the default scenario."""
        scenario = self.scenarios.get(key)
        if scenario is None:
            logger.warning(f"Unknown scenario '{key}', using '{self.default_key}'")
            scenario = self.scenarios[self.default_key]
        return scenario

    def build(self, key: str) -> list[Entity]:
        scenario = self.resolve(key)
        self.factory.oracle.reset()

        logger.info(f"Creating scenario: {scenario.name} ({scenario.key})")
        entities: list[Entity] = []
        for domain, affiliation, count in scenario.entity_counts.categories():
            for _ in range(count):
                entities.append(self.factory.create(domain, affiliation))

        by_domain = {d: 0 for d in Domain}
        by_side = {a: 0 for a in Affiliation}
        for e in entities:
            by_domain[e.domain] += 1
            by_side[e.affiliation] += 1
        logger.info(
            f"Created {len(entities)} entities "
            f"(AIR={by_domain[Domain.AIR]}, MARITIME={by_domain[Domain.MARITIME]}, "
            f"LAND={by_domain[Domain.LAND]})"
        )
        logger.info(
            "Dispositions: " + ", ".join(f"{a.value}={n}" for a, n in by_side.items() if n)
        )
        return entities
