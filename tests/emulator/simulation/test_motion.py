"""Unit tests for MotionSimulator (src/emulator/simulation/motion.py).

Coverage goals:
- Stationary entities never move, only the timestamp refreshes
- Dead reckoning distance = knots x hours / 60 degrees
- Bounds reflection: heading +180, position held
- Maritime coastline bounce, land units hold heading at the shoreline
- Aircraft altitude jitter with the 100 m floor
- Re-targeting toward the patrol circle
- Whole scenarios stay inside the bounds over many ticks
"""

from __future__ import annotations

import math
import random

import pytest

from emulator.domains import Affiliation, Domain, EmitterType
from emulator.geo.catalog import SCENARIO_BOUNDS, default_boundary_index
from emulator.simulation.entity import Entity, FrequencyRange, Position
from emulator.simulation.factory import EntityFactory
from emulator.simulation.motion import MotionSimulator, bearing_deg
from emulator.simulation.scenario import ScenarioBuilder

pytestmark = pytest.mark.unit

# 600 kn for one second covers 600 / 3600 / 60 degrees
ONE_SECOND_AT_600KN = 600.0 / 3600.0 / 60.0


def _entity(domain: Domain, lat: float, lon: float, heading: float = 0.0,
            speed: float = 600.0, altitude: float = 0.0, **kwargs) -> Entity:
    return Entity(
        name="Test",
        domain=domain,
        affiliation=Affiliation.FRIENDLY,
        position=Position(lat, lon, altitude),
        platform_type="Test Platform",
        emitter_type=EmitterType.RADAR,
        frequency_range=FrequencyRange(3000.0, 2900.0, 3100.0),
        heading=heading,
        speed=speed,
        latest_timestamp=0,
        **kwargs,
    )


@pytest.fixture
def steady(fixed_rng):
    """Simulator that never re-targets and adds zero altitude jitter."""
    return MotionSimulator(default_boundary_index(), rng=fixed_rng(0.5))


class TestStationary:
    def test_does_not_move(self, steady):
        e = _entity(Domain.LAND, 19.0, 110.0, speed=0.0, heading=45.0)
        for i in range(100):
            steady.advance([e], 1000, now_ms=1000 * (i + 1))
        assert e.position.latitude == 19.0
        assert e.position.longitude == 110.0
        assert e.heading == 45.0
        assert e.latest_timestamp == 100_000

    def test_zero_delta_moves_nothing(self, steady):
        e = _entity(Domain.AIR, 12.0, 114.0, heading=90.0)
        steady.advance([e], 0, now_ms=5)
        assert e.position.latitude == pytest.approx(12.0)
        assert e.position.longitude == pytest.approx(114.0)
        assert e.latest_timestamp == 5

    def test_negative_delta_rejected(self, steady):
        with pytest.raises(ValueError):
            steady.advance([], -1)


class TestDeadReckoning:
    def test_north(self, steady):
        e = _entity(Domain.AIR, 12.0, 114.0, heading=0.0, altitude=9000.0)
        steady.advance([e], 1000, now_ms=1)
        assert e.position.latitude == pytest.approx(12.0 + ONE_SECOND_AT_600KN)
        assert e.position.longitude == pytest.approx(114.0)

    def test_east(self, steady):
        e = _entity(Domain.MARITIME, 12.0, 114.0, heading=90.0, speed=30.0)
        steady.advance([e], 3_600_000, now_ms=1)
        # 30 kn for an hour = 0.5 degree
        assert e.position.latitude == pytest.approx(12.0, abs=1e-9)
        assert e.position.longitude == pytest.approx(114.5)
        assert e.heading == 90.0

    def test_timestamp_set(self, steady):
        e = _entity(Domain.AIR, 12.0, 114.0, altitude=9000.0)
        steady.advance([e], 1000, now_ms=123456)
        assert e.latest_timestamp == 123456

    def test_default_timestamp_is_wall_clock(self, steady):
        e = _entity(Domain.AIR, 12.0, 114.0, altitude=9000.0)
        steady.advance([e], 1000)
        assert e.latest_timestamp > 1_600_000_000_000


class TestBoundsReflection:
    def test_reflects_at_north_edge(self, steady):
        start_lat = SCENARIO_BOUNDS.max_lat - 0.001
        e = _entity(Domain.AIR, start_lat, 114.0, heading=10.0, altitude=9000.0)
        steady.advance([e], 1000, now_ms=1)
        assert e.heading == pytest.approx(190.0)
        assert e.position.latitude == start_lat
        assert e.position.longitude == 114.0

    def test_reflected_entity_moves_back_in(self, steady):
        start_lat = SCENARIO_BOUNDS.max_lat - 0.001
        e = _entity(Domain.AIR, start_lat, 114.0, heading=0.0, altitude=9000.0)
        steady.advance([e], 1000, now_ms=1)
        steady.advance([e], 1000, now_ms=2)
        assert e.heading == pytest.approx(180.0)
        assert e.position.latitude == pytest.approx(start_lat - ONE_SECOND_AT_600KN)

    def test_heading_wraps(self, steady):
        e = _entity(Domain.AIR, 12.0, SCENARIO_BOUNDS.max_lon - 0.001, heading=100.0,
                    altitude=9000.0)
        steady.advance([e], 1000, now_ms=1)
        assert e.heading == pytest.approx(280.0)
        e2 = _entity(Domain.AIR, 12.0, SCENARIO_BOUNDS.min_lon + 0.001, heading=260.0,
                     altitude=9000.0)
        steady.advance([e2], 1000, now_ms=1)
        assert e2.heading == pytest.approx(80.0)

    def test_maritime_out_of_bounds_single_flip(self, steady):
        # Open water just inside the southern edge, west of Borneo
        e = _entity(Domain.MARITIME, SCENARIO_BOUNDS.min_lat + 0.0001, 106.0, heading=180.0,
                    speed=30.0)
        steady.advance([e], 60_000, now_ms=1)
        assert e.heading == pytest.approx(0.0)


class TestCoastline:
    def test_maritime_bounces_off_land(self, steady):
        # Hainan's southern edge sits at 18.2N
        e = _entity(Domain.MARITIME, 18.19, 110.0, heading=0.0, speed=35.0)
        steady.advance([e], 3_600_000, now_ms=1)
        assert e.heading == pytest.approx(180.0)
        assert e.position.latitude == 18.19
        assert default_boundary_index().is_water(e.position.latitude, e.position.longitude)

    def test_land_holds_heading_at_shore(self, steady):
        e = _entity(Domain.LAND, 18.21, 110.0, heading=180.0, speed=30.0)
        steady.advance([e], 3_600_000, now_ms=1)
        assert e.heading == 180.0
        assert e.position.latitude == 18.21
        assert default_boundary_index().is_land(e.position.latitude, e.position.longitude)

    def test_aircraft_cross_coastline(self, steady):
        e = _entity(Domain.AIR, 18.19, 110.0, heading=0.0, speed=600.0, altitude=9000.0)
        steady.advance([e], 60_000, now_ms=1)
        assert e.position.latitude > 18.2
        assert e.heading == 0.0


class TestAltitude:
    def test_jitter_range(self):
        sim = MotionSimulator(rng=random.Random(3))
        e = _entity(Domain.AIR, 12.0, 114.0, altitude=9000.0)
        prev = e.position.altitude
        for i in range(200):
            sim.advance([e], 1000, now_ms=i)
            assert abs(e.position.altitude - prev) <= 50.0 + 1e-9
            prev = e.position.altitude

    def test_floor(self, fixed_rng):
        # random() = 0.0 -> uniform(-50, 50) = -50 every tick; also re-targets
        sim = MotionSimulator(rng=fixed_rng(0.0))
        e = _entity(Domain.AIR, 12.0, 114.0, altitude=120.0, speed=100.0)
        for i in range(10):
            sim.advance([e], 1000, now_ms=i)
        assert e.position.altitude == 100.0

    def test_surface_units_keep_altitude(self, steady):
        e = _entity(Domain.MARITIME, 12.0, 114.0, speed=20.0)
        steady.advance([e], 1000, now_ms=1)
        assert e.position.altitude == 0.0


class TestRetarget:
    def test_bearing(self):
        assert bearing_deg(0, 0, 1, 0) == pytest.approx(0.0)
        assert bearing_deg(0, 0, 0, 1) == pytest.approx(90.0)
        assert bearing_deg(0, 0, -1, 0) == pytest.approx(180.0)
        assert bearing_deg(0, 0, 0, -1) == pytest.approx(270.0)

    def test_retarget_inside_patrol_circle(self, fixed_rng):
        # random() = 0.01 < 0.05: always re-targets
        sim = MotionSimulator(rng=fixed_rng(0.01))
        e = _entity(Domain.MARITIME, 12.0, 114.0, speed=20.0,
                    patrol_center=(12.0, 114.0), patrol_radius_km=50.0)
        sim.advance([e], 1000, now_ms=1)
        assert e.target_lat is not None and e.target_lon is not None
        deg = math.hypot(e.target_lat - 12.0, e.target_lon - 114.0)
        assert deg <= 50.0 / 111.0
        assert 0.0 <= e.heading < 360.0

    def test_retarget_heading_points_at_target(self):
        sim = MotionSimulator(rng=random.Random(5))
        sim.RETARGET_PROBABILITY = 1.0
        e = _entity(Domain.AIR, 12.0, 114.0, speed=0.001, altitude=9000.0,
                    patrol_center=(13.0, 114.0), patrol_radius_km=10.0)
        sim.advance([e], 1, now_ms=1)
        assert e.heading == pytest.approx(
            bearing_deg(12.0, 114.0, e.target_lat, e.target_lon), abs=1e-6
        )
        # Target is roughly north of the entity
        assert e.heading < 30.0 or e.heading > 330.0

    def test_no_patrol_center_random_heading(self, fixed_rng):
        sim = MotionSimulator(rng=fixed_rng(0.01))
        e = _entity(Domain.AIR, 12.0, 114.0, heading=200.0, altitude=9000.0)
        sim.advance([e], 1000, now_ms=1)
        assert e.target_lat is None
        assert e.heading == pytest.approx(0.01 * 360.0)

    def test_stationary_never_retargets(self, fixed_rng):
        sim = MotionSimulator(rng=fixed_rng(0.01))
        e = _entity(Domain.LAND, 19.0, 110.0, speed=0.0, heading=33.0,
                    patrol_center=(19.0, 110.0), patrol_radius_km=5.0)
        sim.advance([e], 1000, now_ms=1)
        assert e.heading == 33.0
        assert e.target_lat is None


class TestScenarioContainment:
    def test_bounds_hold_over_many_ticks(self):
        rng = random.Random(77)
        builder = ScenarioBuilder(factory=EntityFactory(rng=rng))
        entities = builder.build("stress-tiny")
        sim = MotionSimulator(rng=rng)
        for i in range(500):
            sim.advance(entities, 60_000, now_ms=i)
        for e in entities:
            assert SCENARIO_BOUNDS.contains(e.position.latitude, e.position.longitude), e.name

    def test_stationary_population_does_not_drift(self):
        rng = random.Random(78)
        builder = ScenarioBuilder(factory=EntityFactory(rng=rng))
        entities = builder.build("stress-tiny")
        still = [(e, e.position.latitude, e.position.longitude) for e in entities if e.speed == 0]
        assert still
        sim = MotionSimulator(rng=rng)
        for i in range(100):
            sim.advance(entities, 60_000, now_ms=i)
        for e, lat, lon in still:
            assert (e.position.latitude, e.position.longitude) == (lat, lon)

    def test_maritime_stays_in_water(self):
        rng = random.Random(79)
        builder = ScenarioBuilder(factory=EntityFactory(rng=rng))
        entities = [e for e in builder.build("contested-maritime") if e.domain is Domain.MARITIME]
        sim = MotionSimulator(rng=rng)
        index = default_boundary_index()
        for i in range(300):
            sim.advance(entities, 60_000, now_ms=i)
        for e in entities:
            assert index.is_water(e.position.latitude, e.position.longitude), e.name
