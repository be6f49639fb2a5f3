"""Land/water classification over simplified region polygons.

Region outlines are stored as (lat, lon) rings and tested with ray-casting
(even-odd rule, no Shapely dependency).  A point is LAND when it falls
inside any land polygon; water is simply the complement of the land set.
Boundaries are coarse on purpose, so a point exactly on an edge gets
whatever the ray-cast says and keeps getting it.

Each polygon carries an axis-aligned bounding box so most polygons are
rejected in four float comparisons before the full ray-cast.

Coordinate convention:
    lat = degrees north, lon = degrees east.
    Heading 0 = north, clockwise in degrees.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum

EARTH_RADIUS_KM = 6371.0

# Flat-earth conversion used for placement offsets.  Good enough for the
# few-hundred-km radii the catalog works with.
KM_PER_DEG = 111.0


class Surface(Enum):
    """Result of a land/water classification."""
    LAND = "land"
    WATER = "water"


@dataclass(frozen=True)
class ScenarioBounds:
    """Fixed lat/lon box constraining all generated and simulated positions."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )

    @property
    def center(self) -> tuple[float, float]:
        return (
            (self.min_lat + self.max_lat) / 2,
            (self.min_lon + self.max_lon) / 2,
        )


@dataclass(frozen=True)
class RegionPolygon:
    """A named, simplified outline.  Implicitly closed (last -> first)."""

    name: str
    points: tuple[tuple[float, float], ...]  # (lat, lon) vertices
    is_land: bool = True
    # (min_lat, min_lon, max_lat, max_lon)
    aabb: tuple[float, float, float, float] = field(init=False)

    def __post_init__(self) -> None:
        if not self.points:
            object.__setattr__(self, "aabb", (0.0, 0.0, 0.0, 0.0))
            return
        lats = [p[0] for p in self.points]
        lons = [p[1] for p in self.points]
        object.__setattr__(
            self, "aabb", (min(lats), min(lons), max(lats), max(lons))
        )

    def contains(self, lat: float, lon: float) -> bool:
        min_lat, min_lon, max_lat, max_lon = self.aabb
        if lat < min_lat or lat > max_lat or lon < min_lon or lon > max_lon:
            return False
        return point_in_polygon(lat, lon, self.points)


def point_in_polygon(
    lat: float, lon: float, polygon: tuple[tuple[float, float], ...] | list[tuple[float, float]]
) -> bool:
    """Ray-casting point-in-polygon test.

    Casts a ray from (lat, lon) toward +lon and counts how many polygon
    edges it crosses.  Odd count = inside.
    """
    n = len(polygon)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        yi, xi = polygon[i]
        yj, xj = polygon[j]
        if ((yi > lat) != (yj > lat)) and (
            lon < (xj - xi) * (lat - yi) / (yj - yi) + xi
        ):
            inside = not inside
        j = i
    return inside


class BoundaryIndex:
    """Read-only land/water classifier plus the scenario bounding box.

    Usage:
        index = BoundaryIndex(LAND_MASSES, SCENARIO_BOUNDS)
        if index.classify(lat, lon) is Surface.WATER:
            ...
    """

    def __init__(
        self,
        polygons: tuple[RegionPolygon, ...] | list[RegionPolygon],
        bounds: ScenarioBounds,
    ) -> None:
        # Only land polygons participate; water is the complement.
        self._land: tuple[RegionPolygon, ...] = tuple(
            p for p in polygons if p.is_land
        )
        self._bounds = bounds

    @property
    def bounds(self) -> ScenarioBounds:
        return self._bounds

    @property
    def land_polygons(self) -> tuple[RegionPolygon, ...]:
        return self._land

    def classify(self, lat: float, lon: float) -> Surface:
        for poly in self._land:
            if poly.contains(lat, lon):
                return Surface.LAND
        return Surface.WATER

    def is_land(self, lat: float, lon: float) -> bool:
        return self.classify(lat, lon) is Surface.LAND

    def is_water(self, lat: float, lon: float) -> bool:
        return self.classify(lat, lon) is Surface.WATER

    def contains(self, lat: float, lon: float) -> bool:
        """True if (lat, lon) lies inside the scenario bounding box."""
        return self._bounds.contains(lat, lon)

    def polygon_at(self, lat: float, lon: float) -> RegionPolygon | None:
        """Return the first land polygon containing the point, or None."""
        for poly in self._land:
            if poly.contains(lat, lon):
                return poly
        return None


# ---------------------------------------------------------------------------
# Distance helpers
# ---------------------------------------------------------------------------

def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def offset_point(
    lat: float, lon: float, max_radius_km: float, rng: random.Random | None = None
) -> tuple[float, float]:
    """Random point within *max_radius_km* of (lat, lon).

    Uniform angle, radius drawn uniformly in [0, max_radius_km].  This
    clusters points toward the center, which suits "near the base" placement.
    """
    rng = rng or random
    radius_deg = max_radius_km / KM_PER_DEG
    angle = rng.random() * 2 * math.pi
    dist = rng.random() * radius_deg
    return (lat + dist * math.cos(angle), lon + dist * math.sin(angle))
