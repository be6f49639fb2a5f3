"""MotionSimulator -- advance every entity by one tick.

Per entity, per tick:
  - speed 0: refresh the timestamp only.
  - 5% chance to re-target: pick a random point inside the patrol circle
    and turn toward it (random heading if there is no patrol center).
  - Dead-reckon along the heading: distance = knots x hours / 60 degrees.
  - Leaving the scenario box: reverse heading, hold position.
    Maritime hitting land: reverse heading, hold position.
    Land unit hitting water: hold position, keep heading.
  - Aircraft get +/-50 m altitude jitter, floored at 100 m.

Each entity is independent, so a pass is O(n) with no cross-entity state.
The mutation is in place and unsynchronized; callers serialize access.
"""

from __future__ import annotations

import math
import random
from typing import Iterable

from emulator.domains import Domain
from emulator.geo.boundaries import BoundaryIndex, offset_point
from emulator.geo.catalog import default_boundary_index
from emulator.simulation.entity import Entity, now_ms as _wall_clock_ms

MS_PER_HOUR = 3_600_000
NM_PER_DEG = 60.0  # equatorial approximation


def bearing_deg(lat: float, lon: float, to_lat: float, to_lon: float) -> float:
    """Flat-earth bearing from one point to another, 0 = north, [0, 360)."""
    return (math.degrees(math.atan2(to_lon - lon, to_lat - lat)) + 360.0) % 360.0


class MotionSimulator:
    """Boundary-aware heading + speed integration."""

    RETARGET_PROBABILITY = 0.05
    ALTITUDE_JITTER_M = 50.0
    MIN_AIR_ALTITUDE_M = 100.0

    def __init__(
        self,
        index: BoundaryIndex | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._index = index if index is not None else default_boundary_index()
        self._rng = rng or random.Random()

    @property
    def index(self) -> BoundaryIndex:
        return self._index

    def advance(
        self, entities: Iterable[Entity], delta_ms: float, now_ms: int | None = None
    ) -> None:
        """Move every entity forward by *delta_ms* milliseconds, in place."""
        if delta_ms < 0:
            raise ValueError(f"delta_ms must be non-negative, got {delta_ms}")
        stamp = now_ms if now_ms is not None else _wall_clock_ms()
        delta_hours = delta_ms / MS_PER_HOUR
        for entity in entities:
            self._step(entity, delta_hours, stamp)

    def _step(self, entity: Entity, delta_hours: float, stamp: int) -> None:
        if entity.speed == 0:
            entity.latest_timestamp = stamp
            return

        distance_deg = entity.speed * delta_hours / NM_PER_DEG

        if self._rng.random() < self.RETARGET_PROBABILITY:
            self._retarget(entity)

        pos = entity.position
        heading_rad = math.radians(entity.heading)
        new_lat = pos.latitude + distance_deg * math.cos(heading_rad)
        new_lon = pos.longitude + distance_deg * math.sin(heading_rad)

        # Bounds first: a reflected move must not also be reflected by
        # the coastline test on the same tick.
        moved = True
        if not self._index.contains(new_lat, new_lon):
            entity.heading = (entity.heading + 180.0) % 360.0
            moved = False
        elif entity.domain is Domain.MARITIME and not self._index.is_water(new_lat, new_lon):
            entity.heading = (entity.heading + 180.0) % 360.0
            moved = False
        elif entity.domain is Domain.LAND and not self._index.is_land(new_lat, new_lon):
            moved = False

        if moved:
            pos.latitude = new_lat
            pos.longitude = new_lon

        if entity.domain is Domain.AIR:
            jitter = self._rng.uniform(-self.ALTITUDE_JITTER_M, self.ALTITUDE_JITTER_M)
            pos.altitude = max(self.MIN_AIR_ALTITUDE_M, pos.altitude + jitter)

        entity.latest_timestamp = stamp

    def _retarget(self, entity: Entity) -> None:
        if entity.patrol_center is None or entity.patrol_radius_km <= 0:
            entity.heading = self._rng.random() * 360.0
            return
        c_lat, c_lon = entity.patrol_center
        t_lat, t_lon = offset_point(c_lat, c_lon, entity.patrol_radius_km, self._rng)
        entity.target_lat = t_lat
        entity.target_lon = t_lon
        entity.heading = bearing_deg(
            entity.position.latitude, entity.position.longitude, t_lat, t_lon
        )
