"""Geospatial layer -- land/water classification, reference catalog, placement."""

from emulator.geo.boundaries import (
    BoundaryIndex,
    RegionPolygon,
    ScenarioBounds,
    Surface,
    distance_km,
    offset_point,
    point_in_polygon,
)
from emulator.geo.catalog import SCENARIO_BOUNDS, default_boundary_index
from emulator.geo.sampler import LocationSampler, Placement

__all__ = [
    "BoundaryIndex",
    "LocationSampler",
    "Placement",
    "RegionPolygon",
    "SCENARIO_BOUNDS",
    "ScenarioBounds",
    "Surface",
    "default_boundary_index",
    "distance_km",
    "offset_point",
    "point_in_polygon",
]
