"""Sun, Moon and Ascendant sign classification."""

import logging
import math

from lingfortune.config import DEFAULT_OBSERVER, ObserverConfig
from lingfortune.ephemeris import EphemerisProvider, sample
from lingfortune.models import AstroResult, BirthMoment, Instant

logger = logging.getLogger(__name__)

ZODIAC_SIGNS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)


def normalize_longitude(longitude: float) -> float:
    """Fold any longitude in degrees into [0, 360)."""
    return ((longitude % 360) + 360) % 360


def sign_index(longitude: float) -> int:
    """Index into ZODIAC_SIGNS for an ecliptic longitude. 0 = Aries at 0°-30°."""
    return math.floor(normalize_longitude(longitude) / 30) % 12


def local_sidereal_time(gst_hours: float, longitude_degrees: float) -> float:
    """Local sidereal time in hours from Greenwich sidereal time."""
    return (gst_hours + longitude_degrees / 15) % 24


def rising_index(lst_hours: float) -> int:
    """Ascendant sign index from local sidereal time.

    RAMC = LST * 15°, ASC ≈ RAMC + 90°, so (LST * 15 + 90) / 30 = LST / 2 + 3.
    Ignores latitude and obliquity.
    """
    return math.floor((lst_hours / 2 + 3) % 12)


def local_instant(moment: BirthMoment) -> Instant:
    """Birth wall clock passed as-is; the provider reads it as UTC."""
    return Instant(moment.year, moment.month, moment.day, moment.hour, moment.minute)


def utc_instant(moment: BirthMoment, utc_offset_hours: int) -> Instant:
    """Subtract the UTC offset from the hour only.

    The date is not rolled back here, so the hour can go negative before
    midnight-adjacent births; the provider normalizes it.
    """
    return Instant(
        moment.year,
        moment.month,
        moment.day,
        moment.hour - utc_offset_hours,
        moment.minute,
    )


def classify_astro_positions(
    moment: BirthMoment,
    provider: EphemerisProvider,
    config: ObserverConfig = DEFAULT_OBSERVER,
) -> AstroResult:
    """Classify the Sun, Moon and Ascendant signs for a birth moment.

    Args:
        moment: Birth date and local wall-clock time.
        provider: Ephemeris source for longitudes and sidereal time.
        config: Observer longitude and local-to-UTC offset.

    Returns:
        AstroResult with the three sign labels.

    Raises:
        EphemerisUnavailable: Propagated from the provider. Nothing is returned
            on partial success.
    """
    raw = sample(
        provider, local_instant(moment), utc_instant(moment, config.utc_offset_hours)
    )
    lst = local_sidereal_time(raw.greenwich_sidereal_time, config.longitude)
    sun = sign_index(raw.sun_ecliptic_longitude)
    moon = sign_index(raw.moon_ecliptic_longitude)
    rising = rising_index(lst)
    logger.debug(
        "astro %s: sun=%.3f moon=%.3f gst=%.4f lst=%.4f -> %s/%s/%s",
        moment,
        raw.sun_ecliptic_longitude,
        raw.moon_ecliptic_longitude,
        raw.greenwich_sidereal_time,
        lst,
        sun,
        moon,
        rising,
    )
    return AstroResult(
        sun=ZODIAC_SIGNS[sun],
        moon=ZODIAC_SIGNS[moon],
        rising=ZODIAC_SIGNS[rising],
    )
