"""Simple two-language (zh/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "title_bazi": {
        "zh": "八字命盤核心分析",
        "en": "Bazi Chart Core Analysis",
    },
    "title_astro": {
        "zh": "星盤性格與運勢概覽",
        "en": "Astrology Chart Overview",
    },
    "summary_bazi": {
        "zh": "日主元神為「{stem}{element}」，生肖屬{animal}。",
        "en": "Day master spirit: {stem} {element}. Zodiac animal: {animal}.",
    },
    "summary_astro": {
        "zh": "太陽：{sun} | 上升：{rising} | 月亮：{moon}",
        "en": "Sun: {sun} | Rising: {rising} | Moon: {moon}",
    },
    "narrative_fallback": {
        "zh": "抱歉，目前無法連結宇宙意志，請稍後再試。",
        "en": "Sorry, the cosmos cannot be reached right now. Please try again later.",
    },
    "error_ephemeris": {
        "zh": "無法取得星曆資料：{error}",
        "en": "Ephemeris data unavailable: {error}",
    },
}

# Labels keyed by the English names used in the lookup tables
_LABELS: dict[str, dict[str, str]] = {
    "zh": {
        # Zodiac signs
        "Aries": "牡羊座",
        "Taurus": "金牛座",
        "Gemini": "雙子座",
        "Cancer": "巨蟹座",
        "Leo": "獅子座",
        "Virgo": "處女座",
        "Libra": "天秤座",
        "Scorpio": "天蠍座",
        "Sagittarius": "射手座",
        "Capricorn": "摩羯座",
        "Aquarius": "水瓶座",
        "Pisces": "雙魚座",
        # Five elements
        "Wood": "木",
        "Fire": "火",
        "Earth": "土",
        "Metal": "金",
        "Water": "水",
        # Zodiac animals
        "Rat": "鼠",
        "Ox": "牛",
        "Tiger": "虎",
        "Rabbit": "兔",
        "Dragon": "龍",
        "Snake": "蛇",
        "Horse": "馬",
        "Goat": "羊",
        "Monkey": "猴",
        "Rooster": "雞",
        "Dog": "狗",
        "Pig": "豬",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def label(name: str, lang: str) -> str:
    """Localize a sign, element or animal name. English names pass through."""
    return _LABELS.get(lang, {}).get(name, name)
