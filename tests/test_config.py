"""Tests for settings loading and validation."""

import json

import pytest
from pydantic import ValidationError

from lift_guide.config import LEVEL_LIMIT, LiftSettings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LIFT_CONFIG", raising=False)
    monkeypatch.delenv("LIFT_TIME_SCALE", raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.min_level == -5
    assert settings.max_level == 6
    assert settings.step_delay_ms == 800
    assert settings.leg_hold_ms == 500
    assert settings.arrival_hold_ms == 1000
    assert settings.error_flash_ms == 1500
    assert settings.time_scale == 1.0
    assert settings.floor_count == 12


def test_file_values_merged_over_defaults(tmp_path):
    path = tmp_path / "lift.json"
    path.write_text(json.dumps({"max_level": 10, "step_delay_ms": 200}))
    settings = load_settings(path)
    assert settings.max_level == 10
    assert settings.step_delay_ms == 200
    assert settings.min_level == -5


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "lift.json"
    path.write_text(json.dumps({"colour": "green", "min_level": -7}))
    assert load_settings(path).min_level == -7


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "lift.json"
    path.write_text(json.dumps({"leg_hold_ms": 50}))
    monkeypatch.setenv("LIFT_CONFIG", str(path))
    assert load_settings().leg_hold_ms == 50


def test_time_scale_from_env(tmp_path, monkeypatch):
    path = tmp_path / "lift.json"
    path.write_text(json.dumps({"time_scale": 2.0}))
    monkeypatch.setenv("LIFT_TIME_SCALE", "0")
    assert load_settings(path).time_scale == 0


def test_missing_file_uses_defaults(tmp_path, caplog):
    settings = load_settings(tmp_path / "nope.json")
    assert settings == LiftSettings()
    assert "not found" in caplog.text


def test_bounds_must_cover_mission_levels():
    with pytest.raises(ValidationError):
        LiftSettings(min_level=1, max_level=6)
    with pytest.raises(ValidationError):
        LiftSettings(min_level=-3, max_level=-1)


def test_negative_delays_rejected():
    with pytest.raises(ValidationError):
        LiftSettings(step_delay_ms=-1)
    with pytest.raises(ValidationError):
        LiftSettings(time_scale=-0.5)


def test_narrow_bounds_rejected():
    with pytest.raises(ValidationError, match="guide missions"):
        LiftSettings(min_level=-2, max_level=3)
    with pytest.raises(ValidationError):
        LiftSettings(min_level=-5, max_level=5)


def test_wider_bounds_allowed():
    settings = LiftSettings(min_level=-8, max_level=10)
    assert settings.floor_count == 19


def test_level_limit():
    with pytest.raises(ValidationError):
        LiftSettings(max_level=LEVEL_LIMIT + 1)
