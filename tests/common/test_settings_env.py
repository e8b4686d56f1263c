import logging

import pytest

from chromadepth.common import settings as settings_mod
from chromadepth.common.env import env_bool, env_int, env_str
from chromadepth.common.logging import setup_default_logging


def test_defaults_without_environment():
    s = settings_mod.get()
    assert s.CAPTURE_WIDTH is None and s.CAPTURE_HEIGHT is None
    assert s.RAMP_POLARITY is None
    assert s.PARALLEL_COMPOSITE is True
    assert s.PARALLEL_MIN_PIXELS == 512 * 512
    assert s.LOG_LEVEL == "info"


def test_reload_reads_environment(monkeypatch):
    monkeypatch.setenv("CHROMADEPTH_CAPTURE_WIDTH", "640")
    monkeypatch.setenv("CHROMADEPTH_CAPTURE_HEIGHT", "0")
    monkeypatch.setenv("CHROMADEPTH_RAMP_POLARITY", " Near_Cool ")
    monkeypatch.setenv("CHROMADEPTH_PARALLEL_COMPOSITE", "off")
    monkeypatch.setenv("CHROMADEPTH_LOG_LEVEL", "DEBUG")
    settings_mod.reload_from_env()
    s = settings_mod.get()
    assert s.CAPTURE_WIDTH == 640
    assert s.CAPTURE_HEIGHT is None
    assert s.RAMP_POLARITY == "near_cool"
    assert s.PARALLEL_COMPOSITE is False
    assert s.LOG_LEVEL == "debug"


def test_unknown_polarity_falls_back(monkeypatch):
    monkeypatch.setenv("CHROMADEPTH_RAMP_POLARITY", "diagonal")
    settings_mod.reload_from_env()
    assert settings_mod.get().RAMP_POLARITY is None


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("False", False), ("maybe", True)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("CHROMADEPTH_TEST_FLAG", raw)
    assert env_bool("CHROMADEPTH_TEST_FLAG", True) is expected


def test_env_int_and_str(monkeypatch):
    monkeypatch.setenv("CHROMADEPTH_TEST_INT", "abc")
    assert env_int("CHROMADEPTH_TEST_INT", 7) == 7
    monkeypatch.setenv("CHROMADEPTH_TEST_INT", "-3")
    assert env_int("CHROMADEPTH_TEST_INT", 7, min_value=0) == 0
    monkeypatch.setenv("CHROMADEPTH_TEST_STR", "   ")
    assert env_str("CHROMADEPTH_TEST_STR", "x") == "x"
    assert env_str("CHROMADEPTH_TEST_MISSING") is None


def test_setup_default_logging_is_noop_when_configured(monkeypatch):
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    level = root.level
    try:
        setup_default_logging("debug")
        assert root.level == level
    finally:
        root.removeHandler(handler)
