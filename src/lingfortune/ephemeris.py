"""Ephemeris provider protocol and the skyfield-backed implementation."""

import logging
from pathlib import Path
from typing import Protocol

from skyfield.api import Loader
from skyfield.errors import EphemerisRangeError
from skyfield.framelib import ecliptic_frame
from skyfield.jpllib import SpiceKernel
from skyfield.timelib import Time, Timescale

from lingfortune.models import EphemerisSample, Instant

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent


class EphemerisUnavailable(Exception):
    """The provider cannot produce a value for the requested instant."""


class EphemerisProvider(Protocol):
    """Source of Sun/Moon ecliptic longitude and Greenwich sidereal time."""

    def sun_longitude(self, instant: Instant) -> float:
        """Ecliptic longitude of the Sun in degrees. Need not be normalized."""
        ...

    def moon_longitude(self, instant: Instant) -> float:
        """Ecliptic longitude of the Moon in degrees. Need not be normalized."""
        ...

    def sidereal_time(self, instant: Instant) -> float:
        """Greenwich sidereal time in hours."""
        ...


class SkyfieldEphemeris:
    """EphemerisProvider backed by a JPL kernel loaded through skyfield.

    Instant fields are read as UTC. The kernel is loaded on the first query
    and kept on the instance.
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        ephemeris: str = "de421.bsp",
        loader: Loader | None = None,
    ) -> None:
        if loader is None:
            loader = Loader(str(data_dir or _ROOT / "resources"))
        self._loader = loader
        self._ephemeris_name = ephemeris
        self._eph: SpiceKernel | None = None
        self._ts: Timescale | None = None

    def _load(self) -> tuple[SpiceKernel, Timescale]:
        if self._eph is None:
            logger.info("Loading ephemeris %s", self._ephemeris_name)
            try:
                self._eph = self._loader(self._ephemeris_name)
                self._ts = self._loader.timescale()
            except OSError as e:
                raise EphemerisUnavailable(
                    f"cannot load ephemeris {self._ephemeris_name}: {e}"
                ) from e
        return self._eph, self._ts

    def _time(self, instant: Instant) -> Time:
        _, ts = self._load()
        # Timescale.utc() folds out-of-range hours into the neighbouring day
        return ts.utc(
            instant.year, instant.month, instant.day, instant.hour, instant.minute
        )

    def _ecliptic_longitude(self, body: str, instant: Instant) -> float:
        eph, _ = self._load()
        t = self._time(instant)
        try:
            apparent = eph["earth"].at(t).observe(eph[body]).apparent()
        except (EphemerisRangeError, KeyError, ValueError) as e:
            raise EphemerisUnavailable(
                f"no {body} position for {instant}: {e}"
            ) from e
        _, lon, _ = apparent.frame_latlon(ecliptic_frame)
        return float(lon.degrees)

    def sun_longitude(self, instant: Instant) -> float:
        return self._ecliptic_longitude("sun", instant)

    def moon_longitude(self, instant: Instant) -> float:
        return self._ecliptic_longitude("moon", instant)

    def sidereal_time(self, instant: Instant) -> float:
        try:
            return float(self._time(instant).gast)
        except ValueError as e:
            raise EphemerisUnavailable(f"no sidereal time for {instant}: {e}") from e


def sample(
    provider: EphemerisProvider, instant: Instant, utc_instant: Instant
) -> EphemerisSample:
    """Query all three raw values.

    Args:
        provider: Ephemeris source.
        instant: Wall-clock instant for the Sun and Moon queries.
        utc_instant: Instant for the sidereal time query.

    Raises:
        EphemerisUnavailable: Propagated from the provider.
    """
    return EphemerisSample(
        sun_ecliptic_longitude=provider.sun_longitude(instant),
        moon_ecliptic_longitude=provider.moon_longitude(instant),
        greenwich_sidereal_time=provider.sidereal_time(utc_instant),
    )
