"""LocationSampler -- domain-aware spawn placement by rejection sampling.

Land/water outlines are irregular, so there is no closed-form way to draw
a point "somewhere in the water near this base".  Instead each attempt
proposes a candidate near a catalog anchor and keeps it only if it fits
the entity's domain:

  MARITIME  30% near a naval base of the side's nations (30 km)
            30% along a shipping lane segment, lateral jitter <= width/2
            40% inside an open-ocean zone (zone radius)
            accepted only in water
  LAND      a land installation of the side's nations (20 km)
            accepted only on land
  AIR       40% near an airfield of the side's nations (100 km)
            60% inside an open-ocean zone
            no land/water test

Every candidate must also fall inside the scenario bounds.  After
MAX_ATTEMPTS misses the sampler returns a jittered point in the central
South China Sea.  The loop is a plain counter, so termination does not
depend on catalog contents.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from loguru import logger

from emulator.domains import Affiliation, Domain
from emulator.geo.boundaries import KM_PER_DEG, BoundaryIndex, offset_point
from emulator.geo.catalog import (
    AIRFIELDS,
    FALLBACK_CENTER,
    FALLBACK_JITTER_DEG,
    FALLBACK_NAME,
    LAND_MILITARY_SITES,
    NAVAL_BASES,
    OCEAN_ZONES,
    SHIPPING_LANES,
    ReferenceSite,
    ShippingLane,
    default_boundary_index,
    sites_for,
)


@dataclass(frozen=True)
class Placement:
    """A sampled spawn point and the landmark it was drawn near."""

    lat: float
    lon: float
    near: str
    fallback: bool = False


class LocationSampler:
    """Proposes spawn coordinates consistent with an entity's domain."""

    MAX_ATTEMPTS = 100

    # Strategy split (cumulative thresholds on one uniform draw)
    MARITIME_NEAR_BASE = 0.3
    MARITIME_ON_LANE = 0.6
    AIR_NEAR_AIRFIELD = 0.4

    # Proposal radii
    NAVAL_BASE_RADIUS_KM = 30.0
    LAND_SITE_RADIUS_KM = 20.0
    AIRFIELD_RADIUS_KM = 100.0

    def __init__(
        self,
        index: BoundaryIndex | None = None,
        *,
        naval_bases: tuple[ReferenceSite, ...] = NAVAL_BASES,
        airfields: tuple[ReferenceSite, ...] = AIRFIELDS,
        land_sites: tuple[ReferenceSite, ...] = LAND_MILITARY_SITES,
        ocean_zones: tuple[ReferenceSite, ...] = OCEAN_ZONES,
        shipping_lanes: tuple[ShippingLane, ...] = SHIPPING_LANES,
        rng: random.Random | None = None,
    ) -> None:
        self._index = index if index is not None else default_boundary_index()
        self._naval_bases = naval_bases
        self._airfields = airfields
        self._land_sites = land_sites
        self._ocean_zones = ocean_zones
        self._lanes = shipping_lanes
        self._rng = rng or random.Random()
        self.fallback_count = 0

    @property
    def index(self) -> BoundaryIndex:
        return self._index

    def sample(self, domain: Domain, affiliation: Affiliation) -> Placement:
        """Return a placement for *domain*; never fails."""
        for _attempt in range(self.MAX_ATTEMPTS):
            candidate = self._propose(domain, affiliation)
            if candidate is None:
                continue
            if self._accepts(domain, candidate):
                return candidate

        self.fallback_count += 1
        logger.warning(
            f"Placement for {domain.value}/{affiliation.value} missed "
            f"{self.MAX_ATTEMPTS} times, using fallback point"
        )
        return self._fallback()

    # ------------------------------------------------------------------
    # Proposal strategies
    # ------------------------------------------------------------------

    def _propose(self, domain: Domain, affiliation: Affiliation) -> Placement | None:
        if domain is Domain.MARITIME:
            roll = self._rng.random()
            if roll < self.MARITIME_NEAR_BASE:
                return self._near_site(
                    sites_for(self._naval_bases, affiliation),
                    self.NAVAL_BASE_RADIUS_KM,
                )
            if roll < self.MARITIME_ON_LANE:
                return self._along_lane()
            return self._near_site(self._ocean_zones)

        if domain is Domain.LAND:
            return self._near_site(
                sites_for(self._land_sites, affiliation),
                self.LAND_SITE_RADIUS_KM,
            )

        # AIR
        if self._rng.random() < self.AIR_NEAR_AIRFIELD:
            return self._near_site(
                sites_for(self._airfields, affiliation),
                self.AIRFIELD_RADIUS_KM,
            )
        return self._near_site(self._ocean_zones)

    def _near_site(
        self, sites: tuple[ReferenceSite, ...], radius_km: float | None = None
    ) -> Placement | None:
        if not sites:
            return None
        site = self._rng.choice(sites)
        radius = radius_km if radius_km is not None else site.radius_km
        lat, lon = offset_point(site.lat, site.lon, radius, self._rng)
        return Placement(lat, lon, site.name)

    def _along_lane(self) -> Placement | None:
        lanes = [lane for lane in self._lanes if lane.segment_count > 0]
        if not lanes:
            return None
        lane = self._rng.choice(lanes)
        idx = self._rng.randrange(lane.segment_count)
        (lat0, lon0), (lat1, lon1) = lane.waypoints[idx], lane.waypoints[idx + 1]
        t = self._rng.random()
        lat = lat0 + t * (lat1 - lat0)
        lon = lon0 + t * (lon1 - lon0)
        # Same lateral offset on both axes: a diagonal nudge off the lane
        # center line, bounded by half the corridor width.
        offset = (self._rng.random() - 0.5) * (lane.width_km / KM_PER_DEG)
        return Placement(lat + offset, lon + offset, lane.name)

    # ------------------------------------------------------------------
    # Acceptance + fallback
    # ------------------------------------------------------------------

    def _accepts(self, domain: Domain, candidate: Placement) -> bool:
        if not self._index.contains(candidate.lat, candidate.lon):
            return False
        if domain is Domain.MARITIME:
            return self._index.is_water(candidate.lat, candidate.lon)
        if domain is Domain.LAND:
            return self._index.is_land(candidate.lat, candidate.lon)
        return True

    def _fallback(self) -> Placement:
        lat, lon = FALLBACK_CENTER
        return Placement(
            lat + (self._rng.random() - 0.5) * FALLBACK_JITTER_DEG,
            lon + (self._rng.random() - 0.5) * FALLBACK_JITTER_DEG,
            FALLBACK_NAME,
            fallback=True,
        )
