"""NamingOracle -- platform, display name, callsign and nationality per side.

Names match the entity's domain: hull-numbered warships for maritime
entities, flight callsigns and service designations for aircraft, unit
designators for ground installations.

Uniqueness is scenario-scoped.  Issued names are tracked in a NamePool
owned by the oracle (one oracle per scenario builder, never module state),
and the pool is cleared when a new scenario starts.  When the pool runs
dry the oracle synthesizes "UNIT-XXXX" names that are themselves checked
against the pool, so it never fails and never repeats.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass

from loguru import logger

from emulator.domains import Affiliation, Domain, EmitterType

_R = EmitterType.RADAR
_C = EmitterType.COMMUNICATIONS
_J = EmitterType.JAMMER
_M = EmitterType.MISSILE


@dataclass(frozen=True)
class PlatformDef:
    """One platform class and its pool of names."""

    type: str
    prefix: str
    names: tuple[str, ...]
    emitter_types: tuple[EmitterType, ...]
    hull_numbers: tuple[str, ...] = ()

    @property
    def nationality(self) -> str:
        return _PREFIX_NATIONALITY.get(self.prefix, "UNKNOWN")


@dataclass(frozen=True)
class NameResult:
    """What the oracle hands back for one entity."""

    name: str
    platform_type: str
    callsign: str
    emitter_type: EmitterType
    nationality: str
    synthesized: bool = False


# Service/registry prefix -> nationality
_PREFIX_NATIONALITY: dict[str, str] = {
    "USS": "USA", "USA": "USA", "USMC": "USA",
    "PLANS": "CHINA", "PLAN": "CHINA", "PLAAF": "CHINA",
    "PLA": "CHINA", "PLARF": "CHINA",
    "ROCS": "TAIWAN", "ROCAF": "TAIWAN", "ROCA": "TAIWAN",
    "JS": "JAPAN", "JASDF": "JAPAN", "JGSDF": "JAPAN",
    "MV": "COMMERCIAL", "MT": "COMMERCIAL", "FV": "COMMERCIAL",
}

# Airline code prefix -> nationality for unprefixed civil flights
_AIRLINE_NATIONALITY: tuple[tuple[tuple[str, ...], str], ...] = (
    (("CPA", "CX"), "HONG KONG"),
    (("SIA", "SQ"), "SINGAPORE"),
    (("EVA", "BR"), "TAIWAN"),
    (("JAL", "JL", "ANA", "NH"), "JAPAN"),
    (("VNA", "VN"), "VIETNAM"),
)

# ---------------------------------------------------------------------------
# Maritime platforms
# ---------------------------------------------------------------------------

FRIENDLY_MARITIME: tuple[PlatformDef, ...] = (
    PlatformDef(
        "Arleigh Burke-class Destroyer", "USS",
        ("Benfold", "Milius", "McCampbell", "Halsey", "Wayne E. Meyer",
         "Stockdale", "Chung-Hoon", "Preble", "Kidd", "Pinckney"),
        (_R, _C),
        ("DDG-65", "DDG-69", "DDG-85", "DDG-97", "DDG-108",
         "DDG-106", "DDG-93", "DDG-88", "DDG-100", "DDG-91"),
    ),
    PlatformDef(
        "Ticonderoga-class Cruiser", "USS",
        ("Shiloh", "Antietam", "Chancellorsville", "Mobile Bay", "Lake Erie"),
        (_R, _C, _M),
        ("CG-67", "CG-54", "CG-62", "CG-53", "CG-70"),
    ),
    PlatformDef(
        "Nimitz-class Carrier", "USS",
        ("Ronald Reagan", "Carl Vinson", "Abraham Lincoln",
         "Theodore Roosevelt", "George Washington"),
        (_R, _C),
        ("CVN-76", "CVN-70", "CVN-72", "CVN-71", "CVN-73"),
    ),
    PlatformDef(
        "Virginia-class Submarine", "USS",
        ("Hawaii", "North Carolina", "California", "Mississippi", "Minnesota"),
        (_R, _C),
        ("SSN-776", "SSN-777", "SSN-781", "SSN-782", "SSN-783"),
    ),
    PlatformDef(
        "Oliver Hazard Perry-class Frigate", "ROCS",
        ("Feng Jia", "Ji Long", "Cheng Kung", "Tian Dan", "Ban Chao"),
        (_R, _C),
        ("PFG-1101", "PFG-1103", "PFG-1105", "PFG-1110", "PFG-1108"),
    ),
    PlatformDef(
        "Kongou-class Destroyer", "JS",
        ("Kongou", "Kirishima", "Myoukou", "Choukai"),
        (_R, _C, _M),
        ("DDG-173", "DDG-174", "DDG-175", "DDG-176"),
    ),
)

HOSTILE_MARITIME: tuple[PlatformDef, ...] = (
    PlatformDef(
        "Type 055 Destroyer", "PLANS",
        ("Nanchang", "Lhasa", "Dalian", "Wuxi", "Anshan", "Yan'an", "Zunyi", "Guiyang"),
        (_R, _C, _M),
        ("101", "102", "105", "106", "103", "104", "107", "108"),
    ),
    PlatformDef(
        "Type 052D Destroyer", "PLANS",
        ("Kunming", "Changsha", "Hefei", "Yinchuan", "Xiamen", "Guiyang", "Nanning", "Zibo"),
        (_R, _C, _M),
        ("172", "173", "174", "175", "154", "119", "162", "163"),
    ),
    PlatformDef(
        "Type 054A Frigate", "PLANS",
        ("Xuzhou", "Huanggang", "Linyi", "Handan", "Yiyang", "Changzhou", "Hengyang", "Jingzhou"),
        (_R, _C),
        ("530", "577", "547", "579", "548", "549", "568", "532"),
    ),
    PlatformDef(
        "Type 056 Corvette", "PLANS",
        ("Bengbu", "Huizhou", "Qinzhou", "Jieyang", "Wuzhou", "Meizhou", "Baise"),
        (_R, _C),
        ("582", "596", "597", "587", "594", "595", "585"),
    ),
    PlatformDef(
        "Liaoning-class Carrier", "PLANS",
        ("Liaoning", "Shandong", "Fujian"),
        (_R, _C),
        ("16", "17", "18"),
    ),
    PlatformDef(
        "Type 093 Submarine", "PLANS",
        ("Shang-1", "Shang-2", "Shang-3", "Shang-4"),
        (_R, _C),
        ("409", "410", "411", "412"),
    ),
    PlatformDef(
        "Type 022 Missile Boat", "PLANS",
        ("Houbei-1", "Houbei-2", "Houbei-3", "Houbei-4", "Houbei-5"),
        (_R, _M),
        ("2201", "2202", "2203", "2204", "2205"),
    ),
)

NEUTRAL_MARITIME: tuple[PlatformDef, ...] = (
    PlatformDef(
        "Container Ship", "MV",
        ("Ever Given", "MSC Oscar", "OOCL Hong Kong", "COSCO Shipping",
         "Maersk Alabama", "Yang Ming Unity", "Hapag-Lloyd Express"),
        (_C, _R),
    ),
    PlatformDef(
        "Oil Tanker", "MT",
        ("Seawise Giant", "Jahre Viking", "Knock Nevis", "Pacific Aurora",
         "Atlantic Star", "Gulf Harmony"),
        (_C, _R),
    ),
    PlatformDef(
        "Bulk Carrier", "MV",
        ("Vale Brasil", "Berge Stahl", "China Fortune", "Pacific Voyager",
         "Sea Trader", "Ocean Pioneer"),
        (_C, _R),
    ),
    PlatformDef(
        "Fishing Vessel", "FV",
        ("Lucky Dragon", "Pacific Catch", "Sea Harvest", "Morning Star",
         "Blue Fin", "Ocean Spirit"),
        (_C,),
    ),
)

# ---------------------------------------------------------------------------
# Air platforms
# ---------------------------------------------------------------------------

FRIENDLY_AIR: tuple[PlatformDef, ...] = (
    PlatformDef(
        "F/A-18E/F Super Hornet", "",
        ("HAMMER", "VIPER", "KNIGHT", "RAZOR", "REAPER", "DEMON", "IRON",
         "COBRA", "PHANTOM", "STRIKER"),
        (_R, _C, _J),
    ),
    PlatformDef(
        "F-35C Lightning II", "",
        ("SHADOW", "GHOST", "STEALTH", "RAPTOR", "FALCON", "HAWK", "EAGLE",
         "THUNDER", "STORM", "BLADE"),
        (_R, _C),
    ),
    PlatformDef(
        "E-2D Hawkeye", "",
        ("TIGERTAIL", "CLOSEOUT", "WALLBANGER", "SCREWTOP", "LIBERTY", "OVERWATCH"),
        (_R, _C),
    ),
    PlatformDef(
        "EA-18G Growler", "",
        ("SPARK", "VOLTAGE", "ZAP", "STATIC", "SURGE", "FLASH", "ARC", "BOLT"),
        (_R, _J, _C),
    ),
    PlatformDef(
        "P-8A Poseidon", "",
        ("TRIDENT", "NEPTUNE", "SEAWATCH", "OVERCAST", "MARINER", "SEEKER"),
        (_R, _C),
    ),
    PlatformDef(
        "MQ-4C Triton UAV", "",
        ("TRITON-1", "TRITON-2", "TRITON-3", "TRITON-4"),
        (_R, _C),
    ),
    PlatformDef(
        "KC-135 Stratotanker", "",
        ("TEXACO", "SHELL", "ARCO", "MOBIL", "ESSO", "PETROL"),
        (_C,),
    ),
    PlatformDef(
        "F-16V Fighting Falcon", "ROCAF",
        ("TIGER", "DRAGON", "PHOENIX", "VIPER", "THUNDER"),
        (_R, _C),
    ),
    PlatformDef(
        "F-15J Eagle", "JASDF",
        ("SAMURAI", "NINJA", "SHOGUN", "RONIN", "KATANA"),
        (_R, _C),
    ),
)

HOSTILE_AIR: tuple[PlatformDef, ...] = (
    PlatformDef(
        "J-20 Mighty Dragon", "PLAAF",
        ("RED DRAGON", "BLACK DRAGON", "STORM DRAGON", "IRON DRAGON", "FIRE DRAGON"),
        (_R, _C),
    ),
    PlatformDef(
        "J-16 Strike Fighter", "PLAAF",
        ("FLANKER-1", "FLANKER-2", "FLANKER-3", "FLANKER-4", "FLANKER-5"),
        (_R, _C, _J),
    ),
    PlatformDef(
        "J-11B Fighter", "PLAAF",
        ("SHENYANG-1", "SHENYANG-2", "SHENYANG-3", "SHENYANG-4"),
        (_R, _C),
    ),
    PlatformDef(
        "H-6K Bomber", "PLAAF",
        ("BADGER-1", "BADGER-2", "BADGER-3", "BADGER-4", "BADGER-5", "BADGER-6"),
        (_R, _C, _M),
    ),
    PlatformDef(
        "Y-8 Maritime Patrol", "PLAN",
        ("COOT-1", "COOT-2", "COOT-3", "COOT-4"),
        (_R, _C),
    ),
    PlatformDef(
        "KJ-500 AWACS", "PLAAF",
        ("MAINRING-1", "MAINRING-2", "MAINRING-3"),
        (_R, _C),
    ),
    PlatformDef(
        "WZ-7 Soaring Dragon UAV", "PLAAF",
        ("DRAGON EYE-1", "DRAGON EYE-2", "DRAGON EYE-3", "DRAGON EYE-4"),
        (_R, _C),
    ),
    PlatformDef(
        "Z-20 Helicopter", "PLAN",
        ("HARBIN-1", "HARBIN-2", "HARBIN-3", "HARBIN-4", "HARBIN-5"),
        (_R, _C),
    ),
)

NEUTRAL_AIR: tuple[PlatformDef, ...] = (
    PlatformDef(
        "Boeing 777", "",
        ("CPA881", "SIA318", "EVA052", "JAL066", "ANA912", "VNA730"),
        (_C,),
    ),
    PlatformDef(
        "Airbus A350", "",
        ("CX256", "SQ322", "BR891", "JL045", "NH802", "VN520"),
        (_C,),
    ),
)

# ---------------------------------------------------------------------------
# Land platforms
# ---------------------------------------------------------------------------

FRIENDLY_LAND: tuple[PlatformDef, ...] = (
    PlatformDef("AN/TPS-80 G/ATOR Radar", "USMC", ("WATCHDOG-1", "WATCHDOG-2", "WATCHDOG-3"), (_R,)),
    PlatformDef(
        "Patriot PAC-3 Battery", "USA",
        ("PATRIOT-ALPHA", "PATRIOT-BRAVO", "PATRIOT-CHARLIE", "PATRIOT-DELTA"),
        (_R, _M),
    ),
    PlatformDef("AN/TPY-2 THAAD Radar", "USA", ("THAAD-1", "THAAD-2"), (_R,)),
    PlatformDef(
        "Sky Bow III SAM", "ROCA",
        ("TIEN KUNG-1", "TIEN KUNG-2", "TIEN KUNG-3", "TIEN KUNG-4"),
        (_R, _M),
    ),
    PlatformDef("Type 03 SAM", "JGSDF", ("CHU-SAM-A", "CHU-SAM-B", "CHU-SAM-C"), (_R, _M)),
    PlatformDef(
        "Mobile C2 Node", "USA",
        ("TOC-ALPHA", "TOC-BRAVO", "COMMAND-1", "COMMAND-2"),
        (_C,),
    ),
)

HOSTILE_LAND: tuple[PlatformDef, ...] = (
    PlatformDef(
        "HQ-9 SAM Battery", "PLA",
        ("RED FLAG-1", "RED FLAG-2", "RED FLAG-3", "RED FLAG-4", "RED FLAG-5"),
        (_R, _M),
    ),
    PlatformDef("S-400 SAM Battery", "PLA", ("GROWLER-1", "GROWLER-2", "GROWLER-3"), (_R, _M)),
    PlatformDef(
        "Type 305B Radar", "PLA",
        ("TALL KING-1", "TALL KING-2", "TALL KING-3", "TALL KING-4"),
        (_R,),
    ),
    PlatformDef("YLC-8B AESA Radar", "PLA", ("DRAGON EYE-1", "DRAGON EYE-2", "DRAGON EYE-3"), (_R,)),
    PlatformDef(
        "DF-21D ASBM TEL", "PLARF",
        ("CARRIER KILLER-1", "CARRIER KILLER-2", "CARRIER KILLER-3"),
        (_R, _C, _M),
    ),
    PlatformDef(
        "DF-26 IRBM TEL", "PLARF",
        ("GUAM KILLER-1", "GUAM KILLER-2", "GUAM KILLER-3"),
        (_R, _C, _M),
    ),
    PlatformDef(
        "Coastal Defense Radar", "PLA",
        ("SHORE WATCH-1", "SHORE WATCH-2", "SHORE WATCH-3", "SHORE WATCH-4"),
        (_R,),
    ),
    PlatformDef(
        "C4I Node", "PLA",
        ("COMMAND POST-A", "COMMAND POST-B", "COMMAND POST-C", "COMMAND POST-D"),
        (_C,),
    ),
)

NEUTRAL_LAND: tuple[PlatformDef, ...] = (
    PlatformDef(
        "Airport Surveillance Radar", "",
        ("MANILA-ASR", "TAIPEI-ASR", "HONG KONG-ASR", "SINGAPORE-ASR"),
        (_R,),
    ),
    PlatformDef(
        "Maritime VTS Radar", "",
        ("STRAITS-VTS", "LUZON-VTS", "TAIWAN-VTS", "HAINAN-VTS"),
        (_R,),
    ),
    PlatformDef(
        "Cell Tower", "",
        ("COMM-SITE-1", "COMM-SITE-2", "COMM-SITE-3", "COMM-SITE-4"),
        (_C,),
    ),
)

_PLATFORMS: dict[tuple[Domain, Affiliation], tuple[PlatformDef, ...]] = {
    (Domain.MARITIME, Affiliation.FRIENDLY): FRIENDLY_MARITIME,
    (Domain.MARITIME, Affiliation.HOSTILE): HOSTILE_MARITIME,
    (Domain.MARITIME, Affiliation.NEUTRAL): NEUTRAL_MARITIME,
    (Domain.MARITIME, Affiliation.UNKNOWN): FRIENDLY_MARITIME + HOSTILE_MARITIME,
    (Domain.AIR, Affiliation.FRIENDLY): FRIENDLY_AIR,
    (Domain.AIR, Affiliation.HOSTILE): HOSTILE_AIR,
    (Domain.AIR, Affiliation.NEUTRAL): NEUTRAL_AIR,
    (Domain.AIR, Affiliation.UNKNOWN): FRIENDLY_AIR + HOSTILE_AIR,
    (Domain.LAND, Affiliation.FRIENDLY): FRIENDLY_LAND,
    (Domain.LAND, Affiliation.HOSTILE): HOSTILE_LAND,
    (Domain.LAND, Affiliation.NEUTRAL): NEUTRAL_LAND,
    (Domain.LAND, Affiliation.UNKNOWN): FRIENDLY_LAND + HOSTILE_LAND,
}


def platforms_for(domain: Domain, affiliation: Affiliation) -> tuple[PlatformDef, ...]:
    return _PLATFORMS.get((domain, affiliation), ())


class NamePool:
    """Set of display names already issued in the current scenario."""

    def __init__(self) -> None:
        self._used: set[str] = set()

    def claim(self, name: str) -> bool:
        """Reserve *name*.  Returns False if it was already taken."""
        if name in self._used:
            return False
        self._used.add(name)
        return True

    def reset(self) -> None:
        self._used.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._used

    def __len__(self) -> int:
        return len(self._used)


class NamingOracle:
    """Issues unique names and platform identities for (domain, affiliation)."""

    MAX_ATTEMPTS = 50
    SUFFIX_LENGTH = 4
    _SUFFIX_ALPHABET = string.ascii_uppercase + string.digits

    def __init__(
        self, pool: NamePool | None = None, rng: random.Random | None = None
    ) -> None:
        self.pool = pool if pool is not None else NamePool()
        self._rng = rng or random.Random()

    def reset(self) -> None:
        """Forget every issued name (call at scenario start)."""
        self.pool.reset()

    def available_name_count(self, domain: Domain, affiliation: Affiliation) -> int:
        """Size of the catalog name pool for this combination."""
        return sum(len(p.names) for p in platforms_for(domain, affiliation))

    def next_name(self, domain: Domain, affiliation: Affiliation) -> NameResult:
        platforms = platforms_for(domain, affiliation)
        if not platforms:
            return self._unknown_platform()

        for _attempt in range(self.MAX_ATTEMPTS):
            platform = self._rng.choice(platforms)
            idx = self._rng.randrange(len(platform.names))
            name, callsign = self._compose(domain, platform, idx)
            if self.pool.claim(name):
                return NameResult(
                    name=name,
                    platform_type=platform.type,
                    callsign=callsign,
                    emitter_type=self._rng.choice(platform.emitter_types),
                    nationality=self._nationality(domain, affiliation, platform, platform.names[idx]),
                )

        platform = self._rng.choice(platforms)
        suffix = self._unused_suffix(platform.prefix)
        name = self._prefixed(platform.prefix, f"UNIT-{suffix}")
        logger.debug(f"Name pool exhausted for {domain.value}/{affiliation.value}, issued {name}")
        return NameResult(
            name=name,
            platform_type=platform.type,
            callsign=f"UNIT-{suffix}",
            emitter_type=self._rng.choice(platform.emitter_types),
            nationality=platform.nationality,
            synthesized=True,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _compose(self, domain: Domain, platform: PlatformDef, idx: int) -> tuple[str, str]:
        """Return (display name, callsign) for name *idx* of *platform*."""
        base = platform.names[idx]
        if idx < len(platform.hull_numbers):
            hull = platform.hull_numbers[idx]
            return self._prefixed(platform.prefix, f"{base} ({hull})"), base.upper()
        if domain is Domain.AIR and not platform.prefix:
            flight = f"{base}-{self._rng.randint(1, 99)}"
            return flight, flight
        callsign = "".join(ch for ch in base.upper() if ch.isalnum())
        return self._prefixed(platform.prefix, base), callsign

    @staticmethod
    def _prefixed(prefix: str, text: str) -> str:
        return f"{prefix} {text}" if prefix else text

    @staticmethod
    def _nationality(
        domain: Domain, affiliation: Affiliation, platform: PlatformDef, base: str
    ) -> str:
        if platform.prefix:
            return platform.nationality
        if domain is Domain.AIR and affiliation is Affiliation.NEUTRAL:
            for codes, nationality in _AIRLINE_NATIONALITY:
                if base.startswith(codes):
                    return nationality
            return "COMMERCIAL"
        return "UNKNOWN"

    def _unused_suffix(self, prefix: str) -> str:
        while True:
            suffix = "".join(
                self._rng.choice(self._SUFFIX_ALPHABET) for _ in range(self.SUFFIX_LENGTH)
            )
            if self.pool.claim(self._prefixed(prefix, f"UNIT-{suffix}")):
                return suffix

    def _unknown_platform(self) -> NameResult:
        suffix = self._unused_suffix("UNKNOWN")
        return NameResult(
            name=f"UNKNOWN UNIT-{suffix}",
            platform_type="Unknown Platform",
            callsign=f"UNIT-{suffix}",
            emitter_type=EmitterType.RADAR,
            nationality="UNKNOWN",
            synthesized=True,
        )
