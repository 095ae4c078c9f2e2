import pytest

from lingfortune.ephemeris import EphemerisUnavailable
from lingfortune.models import Instant


class StubEphemeris:
    """Fixed-value provider that records every instant it is asked about."""

    def __init__(self, sun=135.0, moon=10.0, gst=6.0, fail_on=None):
        self.sun = sun
        self.moon = moon
        self.gst = gst
        self.fail_on = fail_on
        self.calls: list[tuple[str, Instant]] = []

    def _answer(self, name: str, instant: Instant, value: float) -> float:
        self.calls.append((name, instant))
        if name == self.fail_on:
            raise EphemerisUnavailable(f"{name} unavailable")
        return value

    def sun_longitude(self, instant: Instant) -> float:
        return self._answer("sun", instant, self.sun)

    def moon_longitude(self, instant: Instant) -> float:
        return self._answer("moon", instant, self.moon)

    def sidereal_time(self, instant: Instant) -> float:
        return self._answer("sidereal", instant, self.gst)


@pytest.fixture
def stub_provider():
    return StubEphemeris()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "LINGFORTUNE_LATITUDE",
        "LINGFORTUNE_LONGITUDE",
        "LINGFORTUNE_UTC_OFFSET",
        "LINGFORTUNE_EPOCH_YEAR",
        "LINGFORTUNE_CUTOVER_MONTH",
        "LINGFORTUNE_CUTOVER_DAY",
        "LINGFORTUNE_EPHEMERIS_DIR",
        "LINGFORTUNE_NARRATIVE_MODEL",
        "ANTHROPIC_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
