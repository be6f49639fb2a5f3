"""Static reference catalog for the contested South China Sea region.

Named anchor points (naval bases, airfields, land installations, open-ocean
zones), shipping lanes, and simplified land outlines.  Everything here is
immutable and loaded once; samplers and the motion simulator share the
same tuples instead of copying them.

Land outlines are rough boxes, not GIS data.  They exist so ships do not
spawn on land and ground units do not wander into the sea.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from emulator.domains import Affiliation
from emulator.geo.boundaries import BoundaryIndex, RegionPolygon, ScenarioBounds


class SiteKind(Enum):
    """Category of a reference site."""
    PORT = "PORT"
    AIRFIELD = "AIRFIELD"
    LAND_MILITARY = "LAND_MILITARY"
    OCEAN = "OCEAN"


@dataclass(frozen=True)
class ReferenceSite:
    """A named point of interest used to bias random placement."""

    name: str
    lat: float
    lon: float
    kind: SiteKind
    country: str
    radius_km: float = 10.0  # influence radius


@dataclass(frozen=True)
class ShippingLane:
    """Ordered waypoints plus a corridor width."""

    name: str
    waypoints: tuple[tuple[float, float], ...]  # (lat, lon)
    width_km: float

    @property
    def segment_count(self) -> int:
        return max(0, len(self.waypoints) - 1)


SCENARIO_BOUNDS = ScenarioBounds(
    min_lat=5.0,     # near Borneo
    max_lat=25.0,    # near Taiwan
    min_lon=105.0,   # Vietnam coast
    max_lon=125.0,   # Philippines
)

# Used when rejection sampling gives up.
FALLBACK_CENTER = (12.0, 114.0)
FALLBACK_JITTER_DEG = 5.0
FALLBACK_NAME = "Central South China Sea"

# ---------------------------------------------------------------------------
# Nationality sets per side
# ---------------------------------------------------------------------------

FRIENDLY_COUNTRIES: frozenset[str] = frozenset({"USA", "JAPAN", "TAIWAN", "PHILIPPINES"})
HOSTILE_COUNTRIES: frozenset[str] = frozenset({"CHINA"})
# Ground installations on the hostile side also include Vietnamese sites.
HOSTILE_LAND_COUNTRIES: frozenset[str] = frozenset({"CHINA", "VIETNAM"})


def nationalities_for(
    affiliation: Affiliation, kind: SiteKind | None = None
) -> frozenset[str] | None:
    """Country set a side may anchor to.  None means the full catalog."""
    if affiliation is Affiliation.FRIENDLY:
        return FRIENDLY_COUNTRIES
    if affiliation is Affiliation.HOSTILE:
        if kind is SiteKind.LAND_MILITARY:
            return HOSTILE_LAND_COUNTRIES
        return HOSTILE_COUNTRIES
    return None


def sites_for(
    sites: tuple[ReferenceSite, ...], affiliation: Affiliation
) -> tuple[ReferenceSite, ...]:
    """Filter *sites* by the affiliation's nationality set."""
    if not sites:
        return ()
    allowed = nationalities_for(affiliation, sites[0].kind)
    if allowed is None:
        return sites
    return tuple(s for s in sites if s.country in allowed)


# ---------------------------------------------------------------------------
# Reference sites
# ---------------------------------------------------------------------------

def _port(name: str, lat: float, lon: float, country: str, radius: float) -> ReferenceSite:
    return ReferenceSite(name, lat, lon, SiteKind.PORT, country, radius)


def _airfield(name: str, lat: float, lon: float, country: str, radius: float) -> ReferenceSite:
    return ReferenceSite(name, lat, lon, SiteKind.AIRFIELD, country, radius)


def _land(name: str, lat: float, lon: float, country: str, radius: float) -> ReferenceSite:
    return ReferenceSite(name, lat, lon, SiteKind.LAND_MILITARY, country, radius)


def _ocean(name: str, lat: float, lon: float, radius: float) -> ReferenceSite:
    return ReferenceSite(name, lat, lon, SiteKind.OCEAN, "INTERNATIONAL", radius)


NAVAL_BASES: tuple[ReferenceSite, ...] = (
    # China
    _port("Yulin Naval Base", 18.2, 109.5, "CHINA", 15),
    _port("Zhanjiang Naval Base", 21.5, 111.8, "CHINA", 12),
    _port("Hong Kong", 22.5, 114.1, "CHINA", 8),
    _port("Woody Island (Yongxing)", 15.0, 109.5, "CHINA", 3),
    _port("Fiery Cross Reef", 9.9, 114.4, "CHINA", 2),
    _port("Subi Reef", 10.4, 114.0, "CHINA", 2),
    _port("Mischief Reef", 10.5, 115.8, "CHINA", 2),
    # Vietnam
    _port("Da Nang", 16.1, 108.2, "VIETNAM", 10),
    _port("Cam Ranh Bay", 12.2, 109.2, "VIETNAM", 12),
    _port("Ho Chi Minh City", 10.8, 106.7, "VIETNAM", 8),
    # Philippines
    _port("Manila Bay", 14.5, 120.9, "PHILIPPINES", 10),
    _port("Subic Bay", 14.8, 120.3, "PHILIPPINES", 8),
    _port("Puerto Princesa", 9.8, 118.7, "PHILIPPINES", 5),
    # Taiwan
    _port("Kaohsiung", 22.6, 120.3, "TAIWAN", 10),
    _port("Keelung", 25.1, 121.8, "TAIWAN", 8),
    # US / allied forward bases (outside the box; rejected by the bounds test)
    _port("Guam Naval Base", 13.4, 144.8, "USA", 15),
    _port("Okinawa", 26.3, 127.8, "JAPAN", 12),
)

AIRFIELDS: tuple[ReferenceSite, ...] = (
    # China
    _airfield("Sanya-Phoenix AFB", 18.2, 109.4, "CHINA", 8),
    _airfield("Zhanjiang AFB", 21.2, 110.4, "CHINA", 8),
    _airfield("Guangzhou AFB", 23.4, 113.3, "CHINA", 10),
    _airfield("Woody Island Airstrip", 15.0, 109.5, "CHINA", 2),
    _airfield("Fiery Cross Airstrip", 9.9, 114.4, "CHINA", 2),
    # Vietnam
    _airfield("Da Nang AFB", 16.0, 108.2, "VIETNAM", 6),
    _airfield("Cam Ranh AFB", 12.0, 109.2, "VIETNAM", 6),
    _airfield("Hanoi (Noi Bai)", 21.2, 105.8, "VIETNAM", 8),
    # Philippines
    _airfield("Clark AFB", 15.2, 120.6, "PHILIPPINES", 10),
    _airfield("Villamor AFB", 14.5, 121.0, "PHILIPPINES", 6),
    _airfield("Palawan AFB", 9.8, 118.8, "PHILIPPINES", 5),
    # Taiwan
    _airfield("Hualien AFB", 24.0, 121.6, "TAIWAN", 6),
    _airfield("Tainan AFB", 23.5, 120.4, "TAIWAN", 6),
    _airfield("Taipei (Songshan)", 25.1, 121.3, "TAIWAN", 8),
    # US / allied
    _airfield("Andersen AFB (Guam)", 13.6, 144.9, "USA", 10),
    _airfield("Kadena AFB (Okinawa)", 26.3, 127.8, "JAPAN", 12),
)

LAND_MILITARY_SITES: tuple[ReferenceSite, ...] = (
    # China coastal defense
    _land("Hainan SAM Site Alpha", 19.0, 110.3, "CHINA", 3),
    _land("Hainan Radar Station", 18.5, 109.8, "CHINA", 2),
    _land("Leizhou SAM Battery", 21.8, 111.0, "CHINA", 3),
    _land("Shenzhen C2 Node", 22.8, 113.5, "CHINA", 2),
    _land("Guangzhou Radar", 23.1, 113.2, "CHINA", 2),
    # Vietnam
    _land("Hue SAM Site", 16.5, 107.6, "VIETNAM", 3),
    _land("Nha Trang Radar", 11.9, 109.0, "VIETNAM", 2),
    _land("Cam Ranh SAM", 12.5, 109.5, "VIETNAM", 3),
    # Philippines
    _land("Zambales Radar", 14.9, 120.5, "PHILIPPINES", 2),
    _land("Northern Luzon C2", 15.5, 120.0, "PHILIPPINES", 2),
    # Taiwan
    _land("Taipei SAM Network", 24.5, 121.0, "TAIWAN", 5),
    _land("Kaohsiung Radar", 22.8, 120.5, "TAIWAN", 3),
    _land("East Coast Surveillance", 23.5, 121.5, "TAIWAN", 4),
)

OCEAN_ZONES: tuple[ReferenceSite, ...] = (
    _ocean("Central South China Sea", 12.0, 112.0, 200),
    _ocean("Southern SCS", 8.0, 110.0, 150),
    _ocean("Northern SCS", 16.0, 115.0, 150),
    _ocean("Philippine Sea West", 18.0, 118.0, 100),
    _ocean("Philippine Sea", 20.0, 125.0, 200),
)

SHIPPING_LANES: tuple[ShippingLane, ...] = (
    ShippingLane(
        "Strait of Malacca to Hong Kong",
        (
            (1.3, 104.0),    # Singapore
            (5.0, 105.0),    # entry to the SCS
            (10.0, 110.0),   # central SCS
            (15.0, 113.0),   # northern SCS
            (22.5, 114.1),   # Hong Kong
        ),
        width_km=50,
    ),
    ShippingLane(
        "Taiwan Strait",
        ((22.5, 118.0), (24.0, 119.0), (25.5, 120.0)),
        width_km=30,
    ),
    ShippingLane(
        "Luzon Strait",
        ((18.0, 120.0), (20.0, 121.5), (22.0, 122.0)),
        width_km=60,
    ),
    ShippingLane(
        "Spratly Islands Patrol",
        ((8.0, 112.0), (10.0, 114.0), (12.0, 116.0), (10.0, 118.0), (8.0, 115.0)),
        width_km=40,
    ),
)

# ---------------------------------------------------------------------------
# Land outlines
# ---------------------------------------------------------------------------

def _box(name: str, min_lat: float, min_lon: float, max_lat: float, max_lon: float) -> RegionPolygon:
    return RegionPolygon(
        name=name,
        points=(
            (min_lat, min_lon),
            (max_lat, min_lon),
            (max_lat, max_lon),
            (min_lat, max_lon),
        ),
        is_land=True,
    )


LAND_MASSES: tuple[RegionPolygon, ...] = (
    _box("Hainan Island", 18.2, 108.6, 20.2, 111.0),
    _box("Vietnam Coast", 8.5, 104.0, 23.5, 108.5),
    _box("China Mainland Coast", 20.0, 108.5, 25.0, 122.0),
    _box("Taiwan", 21.9, 120.0, 25.3, 122.0),
    _box("Philippines (Luzon)", 13.5, 119.5, 18.5, 122.5),
    _box("Philippines (Palawan)", 8.5, 117.0, 12.5, 119.5),
    _box("Borneo (North)", 4.0, 108.0, 7.5, 119.0),
)


@lru_cache(maxsize=1)
def default_boundary_index() -> BoundaryIndex:
    """The shared classifier over LAND_MASSES and SCENARIO_BOUNDS."""
    return BoundaryIndex(LAND_MASSES, SCENARIO_BOUNDS)
