"""Simulation subsystem -- entities, naming, scenarios, motion, engine."""
from .engine import EmulatorEngine
from .entity import Entity, FrequencyRange, Position, now_ms
from .factory import EntityFactory, altitude_for, frequency_range_for, speed_for, validate_placement
from .motion import MotionSimulator, bearing_deg
from .naming import NamePool, NameResult, NamingOracle, PlatformDef, platforms_for
from .scenario import (
    DEFAULT_SCENARIO,
    SCENARIOS,
    EntityCounts,
    ScenarioBuilder,
    ScenarioConfig,
    load_scenarios,
)
