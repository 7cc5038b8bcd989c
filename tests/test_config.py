"""Tests for session configuration loading."""

import json

import pytest

from mandelzoom.config import SessionConfig, load_config, load_settings
from mandelzoom.errors import ConfigError
from mandelzoom.viewport import PlaneBounds


def test_defaults():
    config = SessionConfig()

    assert (config.width, config.height, config.max_iter) == (1900, 870, 500)
    assert config.aspect_ratio == pytest.approx(1900 / 870)


def test_default_bounds_are_aspect_corrected():
    config = SessionConfig(width=400, height=200)

    assert config.default_bounds() == PlaneBounds(-2.0, 2.0, -1.0, 1.0)


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -5},
    {"max_iter": 0},
    {"width": 10.5},
    {"max_iter": "500"},
    {"height": True},
])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        SessionConfig(**kwargs)


def test_load_config_without_file():
    assert load_config() == SessionConfig()


def test_settings_file_and_overrides(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"width": 640, "height": 480, "max_iter": 100}))

    config = load_config(str(path), max_iter=250, height=None)

    assert config == SessionConfig(width=640, height=480, max_iter=250)


def test_missing_settings_file_falls_back_to_defaults(tmp_path, caplog):
    config = load_config(str(tmp_path / "nope.json"))

    assert config == SessionConfig()
    assert "not found" in caplog.text


def test_malformed_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{width: 3")

    with pytest.raises(ConfigError):
        load_settings(str(path))


def test_settings_file_must_hold_an_object(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_unknown_settings_are_rejected(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"zoom": 3}))

    with pytest.raises(ConfigError):
        load_config(str(path))
    with pytest.raises(ConfigError):
        load_config(colormap="hot")
