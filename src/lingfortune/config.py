"""Observer and calendar configuration. Defaults reproduce the Taipei reading."""

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ObserverConfig:
    """Fixed observer for the Astro Position Classifier."""

    latitude: float = 25.0330  # Decimal degrees, north positive
    longitude: float = 121.5654  # Decimal degrees, east positive
    utc_offset_hours: int = 8  # Local wall clock minus UTC


@dataclass(frozen=True)
class SexagenaryConfig:
    """Epoch and Start of Spring cutover for the Sexagenary Classifier."""

    epoch_year: int = 1924  # Jia-Zi year: stem 0, branch 0
    cutover_month: int = 2
    cutover_day: int = 4


DEFAULT_OBSERVER = ObserverConfig()
DEFAULT_SEXAGENARY = SexagenaryConfig()


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from e


def load_observer_config() -> ObserverConfig:
    """Build an ObserverConfig from LINGFORTUNE_* environment variables.

    Unset variables keep the defaults.

    Raises:
        ValueError: When a variable is set but cannot be parsed.
    """
    return ObserverConfig(
        latitude=_env_number(
            "LINGFORTUNE_LATITUDE", DEFAULT_OBSERVER.latitude, float
        ),
        longitude=_env_number(
            "LINGFORTUNE_LONGITUDE", DEFAULT_OBSERVER.longitude, float
        ),
        utc_offset_hours=_env_number(
            "LINGFORTUNE_UTC_OFFSET", DEFAULT_OBSERVER.utc_offset_hours, int
        ),
    )


def load_sexagenary_config() -> SexagenaryConfig:
    """Build a SexagenaryConfig from LINGFORTUNE_* environment variables."""
    return SexagenaryConfig(
        epoch_year=_env_number(
            "LINGFORTUNE_EPOCH_YEAR", DEFAULT_SEXAGENARY.epoch_year, int
        ),
        cutover_month=_env_number(
            "LINGFORTUNE_CUTOVER_MONTH", DEFAULT_SEXAGENARY.cutover_month, int
        ),
        cutover_day=_env_number(
            "LINGFORTUNE_CUTOVER_DAY", DEFAULT_SEXAGENARY.cutover_day, int
        ),
    )


def ephemeris_dir() -> str | None:
    """Directory for skyfield kernel files, or None for the package default."""
    return os.environ.get("LINGFORTUNE_EPHEMERIS_DIR") or None
