"""EmulatorEngine -- owns the live population and the periodic tick thread.

Architecture
------------
The engine is the single owner of the entity list.  Two kinds of work
touch it:

  1. emulator-tick -- a daemon thread that waits ``interval_ms`` and then
     runs MotionSimulator.advance() over every entity.  The motion pass
     mutates entities in place, so it runs under the engine lock.

  2. build_scenario() -- usually from an API request.  The new population
     is built *outside* the lock (a large scenario takes a while to name
     and place) and the list reference is swapped under the lock.
     Readers copy under the same lock, so they observe either the old
     population or the new one, never a mix.  snapshot() serializes under
     the lock too, so a record never mixes coordinates from two ticks.

Tests call tick() directly to exercise the engine without starting threads.
"""

from __future__ import annotations

import random
import threading
from collections import Counter
from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from emulator.domains import Affiliation, Domain, EmitterType
from emulator.geo.boundaries import BoundaryIndex
from emulator.geo.catalog import default_boundary_index
from emulator.geo.sampler import LocationSampler
from emulator.simulation.entity import Entity
from emulator.simulation.factory import EntityFactory
from emulator.simulation.motion import MotionSimulator
from emulator.simulation.naming import NamingOracle
from emulator.simulation.scenario import ScenarioBuilder, ScenarioConfig


class EmulatorEngine:
    """Scenario session: build, tick, and read the live population."""

    SAMPLES_PER_DOMAIN = 2

    def __init__(
        self,
        builder: ScenarioBuilder | None = None,
        simulator: MotionSimulator | None = None,
        interval_ms: int = 1000,
        scenarios: dict[str, ScenarioConfig] | None = None,
        index: BoundaryIndex | None = None,
        seed: int | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        rng = random.Random(seed)
        index = index if index is not None else default_boundary_index()
        if builder is None:
            factory = EntityFactory(
                sampler=LocationSampler(index, rng=rng),
                oracle=NamingOracle(rng=rng),
                rng=rng,
            )
            builder = ScenarioBuilder(factory=factory, scenarios=scenarios)
        self._builder = builder
        self._simulator = simulator if simulator is not None else MotionSimulator(index, rng=rng)
        self.interval_ms = interval_ms

        self._entities: list[Entity] = []
        self._scenario_key: str | None = None
        self._last_update: datetime | None = None
        self._lock = threading.Lock()
        self._running = False
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    def builder(self) -> ScenarioBuilder:
        return self._builder

    @property
    def scenario_key(self) -> str | None:
        return self._scenario_key

    @property
    def running(self) -> bool:
        return self._running

    # -- Population ---------------------------------------------------------

    def build_scenario(self, key: str) -> ScenarioConfig:
        """Replace the live population with a fresh build of *key*.

        Unknown keys fall back to the builder's default.  Returns the
        scenario actually built.
        """
        scenario = self._builder.resolve(key)
        entities = self._builder.build(scenario.key)
        with self._lock:
            self._entities = entities
            self._scenario_key = scenario.key
            self._last_update = datetime.now(timezone.utc)
        self._log_samples(entities)
        return scenario

    def clear(self) -> None:
        with self._lock:
            self._entities = []
            self._scenario_key = None

    def tick(self, delta_ms: float | None = None) -> None:
        """Advance every entity by *delta_ms* (default: one interval)."""
        if delta_ms is None:
            delta_ms = self.interval_ms
        with self._lock:
            self._simulator.advance(self._entities, delta_ms)
            self._last_update = datetime.now(timezone.utc)

    def get_entities(self) -> list[Entity]:
        with self._lock:
            return list(self._entities)

    def get_entity(self, entity_id: str) -> Entity | None:
        with self._lock:
            for entity in self._entities:
                if entity.entity_id == entity_id:
                    return entity
        return None

    def entity_count(self) -> int:
        with self._lock:
            return len(self._entities)

    def snapshot(self, serialize: Callable[[Entity], dict] | None = None) -> list[dict]:
        """Serialize the population under the lock (consistent view).

        *serialize* defaults to ``Entity.to_dict``.  It runs while the tick
        thread is held off, so every record reflects a single tick.
        """
        serialize = serialize or Entity.to_dict
        with self._lock:
            return [serialize(e) for e in self._entities]

    def snapshot_entity(
        self, entity_id: str, serialize: Callable[[Entity], dict] | None = None
    ) -> dict | None:
        """Serialize one entity under the lock, or None if it is unknown."""
        serialize = serialize or Entity.to_dict
        with self._lock:
            for entity in self._entities:
                if entity.entity_id == entity_id:
                    return serialize(entity)
        return None

    def stats(self) -> dict:
        with self._lock:
            entities = list(self._entities)
            scenario = self._scenario_key
            last_update = self._last_update

        # Every enum member is reported, zero counts included
        by_domain = Counter(e.domain for e in entities)
        by_disposition = Counter(e.affiliation for e in entities)
        by_emitter = Counter(e.emitter_type for e in entities)
        return {
            "total": len(entities),
            "by_domain": {d.value: by_domain[d] for d in Domain},
            "by_disposition": {a.value: by_disposition[a] for a in Affiliation},
            "by_emitter_type": {t.value: by_emitter[t] for t in EmitterType},
            "scenario": scenario,
            "last_update": last_update.isoformat() if last_update else None,
        }

    def scenarios(self) -> list[ScenarioConfig]:
        return list(self._builder.scenarios.values())

    def _log_samples(self, entities: list[Entity]) -> None:
        for domain in Domain:
            samples = [e for e in entities if e.domain is domain][: self.SAMPLES_PER_DOMAIN]
            for e in samples:
                logger.info(
                    f"  {domain.value:<8} {e.name} ({e.affiliation.value}) "
                    f"at ({e.position.latitude:.2f}, {e.position.longitude:.2f}) near {e.near}"
                )

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        # Each thread owns its stop event; one outliving stop() never resumes.
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._tick_loop, args=(self._stop_event,),
            name="emulator-tick", daemon=True,
        )
        self._thread.start()
        logger.info(f"Tick loop started ({self.interval_ms} ms)")

    def stop(self) -> None:
        if not self._running and self._thread is None:
            return
        self._running = False
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        logger.info("Tick loop stopped")

    def _tick_loop(self, stop_event: threading.Event) -> None:
        period = self.interval_ms / 1000.0
        while not stop_event.wait(period):
            try:
                self.tick(self.interval_ms)
            except Exception:
                logger.exception("Tick failed")
