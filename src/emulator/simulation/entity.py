"""Entity -- the single mutable record for every simulated platform.

Entity is a *flat dataclass*.  Aircraft, ships and ground units share the
same fields; domain-specific behaviour lives in branches inside the
sampler and the motion simulator, not in subclasses.  An entity mixes
identity (name, platform, emitter), kinematic state (position, heading,
speed) and patrol parameters (center, radius) in one aggregate.

Lifecycle:
  created in bulk by ScenarioBuilder -> mutated in place every tick by
  MotionSimulator -> discarded wholesale on the next scenario build.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field

from emulator.domains import Affiliation, Domain, EmitterType


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Position:
    """Latitude/longitude in degrees, altitude in meters."""

    latitude: float
    longitude: float
    altitude: float = 0.0

    def to_dict(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude": self.altitude,
        }


@dataclass(frozen=True)
class FrequencyRange:
    """Emitter frequency triple in MHz."""

    frequency_avg: float
    frequency_min: float
    frequency_max: float

    def to_dict(self) -> dict:
        return {
            "frequency_avg": self.frequency_avg,
            "frequency_max": self.frequency_max,
            "frequency_min": self.frequency_min,
        }


@dataclass
class Entity:
    """A simulated air, maritime or land platform."""

    name: str
    domain: Domain
    affiliation: Affiliation
    position: Position
    platform_type: str
    emitter_type: EmitterType
    frequency_range: FrequencyRange
    heading: float = 0.0  # degrees, 0 = north, clockwise
    speed: float = 0.0    # knots; 0 = stationary
    callsign: str = ""
    nationality: str = "UNKNOWN"
    entity_type: str = "Emitter"
    near: str = ""        # landmark the spawn point was drawn near

    # Patrol behaviour
    patrol_center: tuple[float, float] | None = None  # (lat, lon)
    patrol_radius_km: float = 0.0
    target_lat: float | None = None
    target_lon: float | None = None

    entity_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    latest_timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        return {
            "source_entity_uuid": self.entity_id,
            "entity_name": self.name,
            "position": self.position.to_dict(),
            "entity_type": self.entity_type,
            "emitter_type": self.emitter_type.value,
            "mil_view": {
                "disposition": self.affiliation.value,
                "nationality": self.nationality,
            },
            "latest_timestamp": self.latest_timestamp,
            "domain": self.domain.value,
            "platform_type": self.platform_type,
            "callsign": self.callsign,
            "heading": self.heading,
            "speed": self.speed,
            "frequency_range": self.frequency_range.to_dict(),
            "near": self.near,
            "patrol_center": (
                {"lat": self.patrol_center[0], "lon": self.patrol_center[1]}
                if self.patrol_center is not None else None
            ),
            "patrol_radius_km": self.patrol_radius_km,
        }
