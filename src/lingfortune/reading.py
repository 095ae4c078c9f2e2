"""Compose classifier results into display-ready readings."""

import logging
from collections.abc import Callable
from datetime import datetime

from lingfortune.astro import classify_astro_positions
from lingfortune.config import (
    DEFAULT_OBSERVER,
    DEFAULT_SEXAGENARY,
    ObserverConfig,
    SexagenaryConfig,
)
from lingfortune.ephemeris import EphemerisProvider
from lingfortune.i18n import label, t
from lingfortune.models import BirthMoment, Reading, ReadingMode
from lingfortune.narrative import NarrativeError, generate_interpretation
from lingfortune.sexagenary import classify_sexagenary

__all__ = [
    "ReadingMode",
    "astro_reading",
    "bazi_reading",
    "interpret",
    "parse_birth_moment",
]

logger = logging.getLogger(__name__)


def parse_birth_moment(when: str) -> BirthMoment:
    """Parse a "YYYY-MM-DD HH:MM" string into a BirthMoment.

    Raises:
        ValueError: Malformed string or a date that does not exist.
    """
    dt = datetime.strptime(when.strip(), "%Y-%m-%d %H:%M")
    return BirthMoment(
        year=dt.year, month=dt.month, day=dt.day, hour=dt.hour, minute=dt.minute
    )


def bazi_reading(
    moment: BirthMoment,
    lang: str = "zh",
    config: SexagenaryConfig = DEFAULT_SEXAGENARY,
) -> Reading:
    """Build the Bazi reading for a birth moment."""
    result = classify_sexagenary(moment.year, moment.month, moment.day, config)
    element = label(result.stem.element, lang)
    animal = label(result.animal, lang)
    return Reading(
        mode=ReadingMode.BAZI,
        title=t("title_bazi", lang),
        summary=t("summary_bazi", lang).format(
            stem=result.stem.char, element=element, animal=animal
        ),
        details={
            "main": f"{result.stem.char}{result.branch.char}",
            "element": element,
            "animal": animal,
            "effective_year": str(result.effective_year),
        },
        lang=lang,
    )


def astro_reading(
    moment: BirthMoment,
    provider: EphemerisProvider,
    lang: str = "zh",
    config: ObserverConfig = DEFAULT_OBSERVER,
) -> Reading:
    """Build the astrology reading for a birth moment.

    Raises:
        EphemerisUnavailable: Propagated from the provider.
    """
    result = classify_astro_positions(moment, provider, config)
    sun = label(result.sun, lang)
    moon = label(result.moon, lang)
    rising = label(result.rising, lang)
    return Reading(
        mode=ReadingMode.ASTRO,
        title=t("title_astro", lang),
        summary=t("summary_astro", lang).format(sun=sun, rising=rising, moon=moon),
        details={"sun": sun, "moon": moon, "rising": rising},
        lang=lang,
    )


def interpret(
    reading: Reading,
    question: str = "",
    generate: Callable[..., str] = generate_interpretation,
) -> str:
    """Return an interpretation, or the localized fallback if generation fails."""
    try:
        return generate(reading, question=question)
    except NarrativeError as e:
        logger.warning("Falling back to canned interpretation: %s", e)
        return t("narrative_fallback", reading.lang)
