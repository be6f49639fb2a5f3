"""Base enums shared by placement, naming, and motion.

Domain      -- where an entity lives (air, sea, ground)
Affiliation -- which side it is on; also filters catalogs and name pools
EmitterType -- what kind of RF emitter it carries
"""

from __future__ import annotations

from enum import Enum


class Domain(Enum):
    """Entity category governing placement and motion rules."""
    AIR = "AIR"
    MARITIME = "MARITIME"
    LAND = "LAND"


class Affiliation(Enum):
    """Disposition of an entity relative to the friendly force."""
    FRIENDLY = "FRIENDLY"
    HOSTILE = "HOSTILE"
    NEUTRAL = "NEUTRAL"
    UNKNOWN = "UNKNOWN"


class EmitterType(Enum):
    """Primary emitter carried by a platform."""
    RADAR = "RADAR"
    COMMUNICATIONS = "COMMUNICATIONS"
    JAMMER = "JAMMER"
    MISSILE = "MISSILE"
