"""Sexagenary (Gan-Zhi) year classification."""

import logging

from lingfortune.config import DEFAULT_SEXAGENARY, SexagenaryConfig
from lingfortune.models import EarthlyBranch, HeavenlyStem, SexagenaryResult

logger = logging.getLogger(__name__)

HEAVENLY_STEMS: tuple[HeavenlyStem, ...] = (
    HeavenlyStem("甲", "Jia", "Wood"),
    HeavenlyStem("乙", "Yi", "Wood"),
    HeavenlyStem("丙", "Bing", "Fire"),
    HeavenlyStem("丁", "Ding", "Fire"),
    HeavenlyStem("戊", "Wu", "Earth"),
    HeavenlyStem("己", "Ji", "Earth"),
    HeavenlyStem("庚", "Geng", "Metal"),
    HeavenlyStem("辛", "Xin", "Metal"),
    HeavenlyStem("壬", "Ren", "Water"),
    HeavenlyStem("癸", "Gui", "Water"),
)

EARTHLY_BRANCHES: tuple[EarthlyBranch, ...] = (
    EarthlyBranch("子", "Zi"),
    EarthlyBranch("丑", "Chou"),
    EarthlyBranch("寅", "Yin"),
    EarthlyBranch("卯", "Mao"),
    EarthlyBranch("辰", "Chen"),
    EarthlyBranch("巳", "Si"),
    EarthlyBranch("午", "Wu"),
    EarthlyBranch("未", "Wei"),
    EarthlyBranch("申", "Shen"),
    EarthlyBranch("酉", "You"),
    EarthlyBranch("戌", "Xu"),
    EarthlyBranch("亥", "Hai"),
)

# Positionally aligned with EARTHLY_BRANCHES
ZODIAC_ANIMALS: tuple[str, ...] = (
    "Rat",
    "Ox",
    "Tiger",
    "Rabbit",
    "Dragon",
    "Snake",
    "Horse",
    "Goat",
    "Monkey",
    "Rooster",
    "Dog",
    "Pig",
)


def effective_year(
    year: int, month: int, day: int, config: SexagenaryConfig = DEFAULT_SEXAGENARY
) -> int:
    """Return the sexagenary year after the Start of Spring cutover.

    The boundary is pinned to ``config.cutover_month``/``cutover_day`` (Feb 4)
    every year. The true solar term drifts by about a day either way, so
    births on Feb 3-5 can land on the wrong side of it.

    Months outside 1-12 are not adjusted; only January up to the cutover
    month counts as "before Start of Spring".
    """
    if 1 <= month < config.cutover_month or (
        month == config.cutover_month and day < config.cutover_day
    ):
        return year - 1
    return year


def cycle_indices(offset: int) -> tuple[int, int]:
    """Return (stem_index, branch_index) for a year offset from the epoch.

    Both indices are non-negative for negative offsets too.
    """
    stem_index = ((offset % 10) + 10) % 10
    branch_index = ((offset % 12) + 12) % 12
    return stem_index, branch_index


def classify_sexagenary(
    year: int, month: int, day: int, config: SexagenaryConfig = DEFAULT_SEXAGENARY
) -> SexagenaryResult:
    """Classify a birth date into its sexagenary year stem, branch and animal.

    Args:
        year: Civil year. Any integer, including years before the epoch.
        month: Civil month. Only compared against the cutover month.
        day: Day of month. Only compared against the cutover day.
        config: Epoch year and cutover date.

    Returns:
        SexagenaryResult with the stem, branch, animal and the effective year.
    """
    sexagenary_year = effective_year(year, month, day, config)
    stem_index, branch_index = cycle_indices(sexagenary_year - config.epoch_year)
    logger.debug(
        "sexagenary %s-%s-%s -> year=%s stem=%s branch=%s",
        year,
        month,
        day,
        sexagenary_year,
        stem_index,
        branch_index,
    )
    return SexagenaryResult(
        stem=HEAVENLY_STEMS[stem_index],
        branch=EARTHLY_BRANCHES[branch_index],
        animal=ZODIAC_ANIMALS[branch_index],
        effective_year=sexagenary_year,
    )
