"""Tests for config.py - environment driven settings."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from timetrack.config import (
    DEFAULT_BLINK_INTERVAL,
    DEFAULT_DATA_FILE,
    DEFAULT_REFRESH_INTERVAL,
    load_settings,
)

ENV_VARS = (
    "TIMETRACK_DATA_FILE",
    "TIMETRACK_LOG_DIR",
    "TIMETRACK_LOG_LEVEL",
    "TIMETRACK_REFRESH_INTERVAL",
    "TIMETRACK_BLINK_INTERVAL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self) -> None:
        settings = load_settings()

        assert settings.data_file == DEFAULT_DATA_FILE
        assert settings.log_level == logging.INFO
        assert settings.refresh_interval == DEFAULT_REFRESH_INTERVAL
        assert settings.blink_interval == DEFAULT_BLINK_INTERVAL

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("TIMETRACK_DATA_FILE", str(tmp_path / "data.json"))
        monkeypatch.setenv("TIMETRACK_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("TIMETRACK_LOG_LEVEL", "debug")
        monkeypatch.setenv("TIMETRACK_REFRESH_INTERVAL", "2.5")

        settings = load_settings()

        assert settings.data_file == tmp_path / "data.json"
        assert settings.log_dir == tmp_path / "logs"
        assert settings.log_level == logging.DEBUG
        assert settings.refresh_interval == 2.5

    def test_explicit_data_file_wins(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("TIMETRACK_DATA_FILE", str(tmp_path / "env.json"))

        assert load_settings(tmp_path / "flag.json").data_file == tmp_path / "flag.json"

    @pytest.mark.parametrize("raw", ["", "fast", "0", "-1"])
    def test_bad_intervals_fall_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("TIMETRACK_BLINK_INTERVAL", raw)

        assert load_settings().blink_interval == DEFAULT_BLINK_INTERVAL

    def test_unknown_log_level_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMETRACK_LOG_LEVEL", "chatty")

        assert load_settings().log_level == logging.INFO
