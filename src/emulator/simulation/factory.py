"""EntityFactory -- compose one entity from a (domain, affiliation) pair.

Steps:
  1. LocationSampler picks a spawn point consistent with the domain.
  2. NamingOracle supplies name, platform type, callsign, emitter, nationality.
  3. Altitude and speed come from keyword bands on the platform type.
  4. Heading is uniform 0-360; the patrol center is the spawn point.
  5. The emitter gets a frequency triple from its band table.
  6. Placement is re-checked.  A maritime entity on land, a land entity in
     water, or anything outside the bounds is logged, never rejected.

Keyword matching is case-insensitive on whole words of the platform type,
first matching row wins.
"""

from __future__ import annotations

import random
import re

from loguru import logger

from emulator.domains import Affiliation, Domain, EmitterType
from emulator.geo.boundaries import BoundaryIndex
from emulator.geo.sampler import LocationSampler
from emulator.simulation.entity import Entity, FrequencyRange, Position, now_ms
from emulator.simulation.naming import NamingOracle

# (keywords, (low, high)) -- altitude in meters
_AIR_ALTITUDE_BANDS: tuple[tuple[frozenset[str], tuple[float, float]], ...] = (
    (frozenset({"uav", "drone"}), (3000.0, 8000.0)),
    (frozenset({"fighter", "strike"}), (8000.0, 15000.0)),
    (frozenset({"bomber"}), (10000.0, 15000.0)),
    (frozenset({"helicopter"}), (100.0, 1600.0)),
    (frozenset({"tanker", "stratotanker", "awacs"}), (8000.0, 12000.0)),
)
_AIR_ALTITUDE_DEFAULT = (5000.0, 15000.0)

# (keywords, (low, high)) -- speed in knots
_AIR_SPEED_BANDS: tuple[tuple[frozenset[str], tuple[float, float]], ...] = (
    (frozenset({"helicopter"}), (80.0, 160.0)),
    (frozenset({"uav", "drone"}), (100.0, 250.0)),
    (frozenset({"fighter", "strike"}), (400.0, 700.0)),
    (frozenset({"bomber"}), (400.0, 600.0)),
)
_AIR_SPEED_DEFAULT = (300.0, 600.0)

_MARITIME_SPEED_BANDS: tuple[tuple[frozenset[str], tuple[float, float]], ...] = (
    (frozenset({"cargo", "tanker", "container", "bulk"}), (12.0, 20.0)),
    (frozenset({"patrol", "corvette"}), (15.0, 30.0)),
    (frozenset({"destroyer", "frigate"}), (18.0, 30.0)),
    (frozenset({"carrier", "cruiser"}), (20.0, 35.0)),
)
_MARITIME_SPEED_DEFAULT = (15.0, 30.0)

# Ground units sit still unless flagged mobile
_LAND_MOBILE_KEYWORDS = frozenset({"mobile", "tel"})
_LAND_MOBILE_SPEED = (0.0, 30.0)

# Patrol radius by domain, km
PATROL_RADIUS_KM: dict[Domain, float] = {
    Domain.LAND: 5.0,
    Domain.MARITIME: 50.0,
    Domain.AIR: 100.0,
}

# Named bands per emitter type: (base MHz, bandwidth MHz)
RADAR_BANDS: dict[str, tuple[float, float]] = {
    "L": (1500.0, 500.0),
    "S": (3000.0, 1000.0),
    "C": (6000.0, 2000.0),
    "X": (10000.0, 2000.0),
}
COMM_BANDS: dict[str, tuple[float, float]] = {
    "VHF": (150.0, 100.0),
    "UHF-low": (400.0, 200.0),
    "UHF-high": (1800.0, 500.0),
    "SHF": (5000.0, 1000.0),
}
JAMMER_BASE_MHZ = (2000.0, 10000.0)
JAMMER_BANDWIDTH_MHZ = (1000.0, 3000.0)
MISSILE_BASE_MHZ = (10000.0, 15000.0)  # X/Ku guidance
MISSILE_BANDWIDTH_MHZ = 500.0


def _keywords(platform_type: str) -> set[str]:
    return {w for w in re.split(r"[^a-z0-9]+", platform_type.lower()) if w}


def _band(
    platform_type: str,
    bands: tuple[tuple[frozenset[str], tuple[float, float]], ...],
    default: tuple[float, float],
) -> tuple[float, float]:
    words = _keywords(platform_type)
    for keywords, band in bands:
        if words & keywords:
            return band
    return default


def altitude_for(domain: Domain, platform_type: str = "", rng: random.Random | None = None) -> float:
    """Altitude in meters.  Sea and ground units sit at 0."""
    if domain is not Domain.AIR:
        return 0.0
    rng = rng or random
    low, high = _band(platform_type, _AIR_ALTITUDE_BANDS, _AIR_ALTITUDE_DEFAULT)
    return rng.uniform(low, high)


def speed_for(domain: Domain, platform_type: str = "", rng: random.Random | None = None) -> float:
    """Cruise speed in knots."""
    rng = rng or random
    if domain is Domain.AIR:
        low, high = _band(platform_type, _AIR_SPEED_BANDS, _AIR_SPEED_DEFAULT)
    elif domain is Domain.MARITIME:
        low, high = _band(platform_type, _MARITIME_SPEED_BANDS, _MARITIME_SPEED_DEFAULT)
    else:
        if not (_keywords(platform_type) & _LAND_MOBILE_KEYWORDS):
            return 0.0
        low, high = _LAND_MOBILE_SPEED
    return rng.uniform(low, high)


def frequency_range_for(emitter_type: EmitterType, rng: random.Random | None = None) -> FrequencyRange:
    """Average/min/max frequency in MHz, jittered inside the emitter's band."""
    rng = rng or random
    if emitter_type is EmitterType.RADAR:
        base, bandwidth = RADAR_BANDS[rng.choice(list(RADAR_BANDS))]
    elif emitter_type is EmitterType.COMMUNICATIONS:
        base, bandwidth = COMM_BANDS[rng.choice(list(COMM_BANDS))]
    elif emitter_type is EmitterType.JAMMER:
        base = rng.uniform(*JAMMER_BASE_MHZ)
        bandwidth = rng.uniform(*JAMMER_BANDWIDTH_MHZ)
    else:
        base = rng.uniform(*MISSILE_BASE_MHZ)
        bandwidth = MISSILE_BANDWIDTH_MHZ

    avg = base + (rng.random() - 0.5) * bandwidth
    half = bandwidth / 2
    return FrequencyRange(
        frequency_avg=avg,
        frequency_min=avg - half * rng.random(),
        frequency_max=avg + half * rng.random(),
    )


def validate_placement(entity: Entity, index: BoundaryIndex) -> bool:
    """Check the domain/position invariant.  Logs a warning on violation."""
    lat = entity.position.latitude
    lon = entity.position.longitude
    ok = True
    if entity.domain is Domain.MARITIME and not index.is_water(lat, lon):
        logger.warning(f"Maritime entity '{entity.name}' placed on land at ({lat:.2f}, {lon:.2f})")
        ok = False
    elif entity.domain is Domain.LAND and not index.is_land(lat, lon):
        logger.warning(f"Land entity '{entity.name}' placed in water at ({lat:.2f}, {lon:.2f})")
        ok = False
    if not index.contains(lat, lon):
        logger.warning(f"Entity '{entity.name}' placed outside scenario bounds at ({lat:.2f}, {lon:.2f})")
        ok = False
    return ok


class EntityFactory:
    """Builds complete Entity records."""

    def __init__(
        self,
        sampler: LocationSampler | None = None,
        oracle: NamingOracle | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self.sampler = sampler if sampler is not None else LocationSampler(rng=self._rng)
        self.oracle = oracle if oracle is not None else NamingOracle(rng=self._rng)

    def create(self, domain: Domain, affiliation: Affiliation) -> Entity:
        placement = self.sampler.sample(domain, affiliation)
        identity = self.oracle.next_name(domain, affiliation)

        entity = Entity(
            name=identity.name,
            domain=domain,
            affiliation=affiliation,
            position=Position(
                latitude=placement.lat,
                longitude=placement.lon,
                altitude=altitude_for(domain, identity.platform_type, self._rng),
            ),
            platform_type=identity.platform_type,
            emitter_type=identity.emitter_type,
            frequency_range=frequency_range_for(identity.emitter_type, self._rng),
            heading=self._rng.random() * 360.0,
            speed=speed_for(domain, identity.platform_type, self._rng),
            callsign=identity.callsign,
            nationality=identity.nationality,
            near=placement.near,
            patrol_center=(placement.lat, placement.lon),
            patrol_radius_km=PATROL_RADIUS_KM[domain],
            latest_timestamp=now_ms(),
        )
        validate_placement(entity, self.sampler.index)
        return entity
