"""Data model definitions: explicit boundaries between input, classify, and reading layers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class BirthMoment:
    """Birth date and wall-clock time. Calendar fields are trusted as given."""

    year: int  # Civil year, any integer
    month: int  # 1-12
    day: int  # 1-31, not checked against month length
    hour: int  # 0-23, local wall clock
    minute: int  # 0-59


@dataclass(frozen=True)
class Instant:
    """Wall-clock fields handed to an ephemeris provider.

    ``hour`` may fall outside 0-23; providers normalize it arithmetically
    (hour -3 on the 15th is 21:00 on the 14th).
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int


@dataclass(frozen=True)
class HeavenlyStem:
    """One of the ten heavenly stems."""

    char: str  # "甲"
    pinyin: str  # "Jia"
    element: str  # "Wood", "Fire", "Earth", "Metal" or "Water"


@dataclass(frozen=True)
class EarthlyBranch:
    """One of the twelve earthly branches."""

    char: str  # "子"
    pinyin: str  # "Zi"


@dataclass(frozen=True)
class SexagenaryResult:
    """Year pillar of the sexagenary cycle."""

    stem: HeavenlyStem
    branch: EarthlyBranch
    animal: str  # Zodiac animal aligned with the branch ("Rat", "Ox", ...)
    effective_year: int  # Year after the Start of Spring cutover


@dataclass(frozen=True)
class AstroResult:
    """Sun, Moon and Ascendant sign labels ("Aries" ... "Pisces")."""

    sun: str
    moon: str
    rising: str


@dataclass(frozen=True)
class EphemerisSample:
    """Raw provider output. Values are not normalized."""

    sun_ecliptic_longitude: float  # Degrees
    moon_ecliptic_longitude: float  # Degrees
    greenwich_sidereal_time: float  # Hours


class ReadingMode(Enum):
    BAZI = "bazi"
    ASTRO = "astro"


@dataclass(frozen=True)
class Reading:
    """Display-ready reading. The sole input to the narrative generator."""

    mode: ReadingMode
    title: str
    summary: str
    details: Mapping[str, str] = field(default_factory=dict)
    lang: str = "zh"

    def __post_init__(self) -> None:
        # Freeze details so the record stays immutable end to end
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def __hash__(self) -> int:
        return hash(
            (self.mode, self.title, self.summary, tuple(self.details.items()), self.lang)
        )

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "title": self.title,
            "summary": self.summary,
            "details": dict(self.details),
            "lang": self.lang,
        }
