import pytest

from lingfortune.config import (
    DEFAULT_OBSERVER,
    DEFAULT_SEXAGENARY,
    ephemeris_dir,
    load_observer_config,
    load_sexagenary_config,
)


def test_defaults_match_taipei():
    assert DEFAULT_OBSERVER.latitude == 25.0330
    assert DEFAULT_OBSERVER.longitude == 121.5654
    assert DEFAULT_OBSERVER.utc_offset_hours == 8
    assert DEFAULT_SEXAGENARY.epoch_year == 1924
    assert (DEFAULT_SEXAGENARY.cutover_month, DEFAULT_SEXAGENARY.cutover_day) == (2, 4)


def test_unset_environment_keeps_defaults():
    assert load_observer_config() == DEFAULT_OBSERVER
    assert load_sexagenary_config() == DEFAULT_SEXAGENARY
    assert ephemeris_dir() is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LINGFORTUNE_LATITUDE", "37.5665")
    monkeypatch.setenv("LINGFORTUNE_LONGITUDE", " 126.978 ")
    monkeypatch.setenv("LINGFORTUNE_UTC_OFFSET", "9")
    monkeypatch.setenv("LINGFORTUNE_CUTOVER_DAY", "5")
    monkeypatch.setenv("LINGFORTUNE_EPHEMERIS_DIR", "/tmp/kernels")
    observer = load_observer_config()
    assert observer.latitude == 37.5665
    assert observer.longitude == 126.978
    assert observer.utc_offset_hours == 9
    assert load_sexagenary_config().cutover_day == 5
    assert ephemeris_dir() == "/tmp/kernels"


def test_blank_value_keeps_default(monkeypatch):
    monkeypatch.setenv("LINGFORTUNE_UTC_OFFSET", "  ")
    assert load_observer_config().utc_offset_hours == 8


def test_malformed_value_names_the_variable(monkeypatch):
    monkeypatch.setenv("LINGFORTUNE_UTC_OFFSET", "eight")
    with pytest.raises(ValueError, match="LINGFORTUNE_UTC_OFFSET"):
        load_observer_config()
