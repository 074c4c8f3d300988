"""Settings loaded from environment variables.

One Settings object for the whole app; command-line flags override the
environment, the environment overrides the defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TIMETRACK"

DEFAULT_DATA_FILE = Path.home() / ".timetracker-data.json"
DEFAULT_LOG_DIR = Path.home() / ".local" / "state" / "timetrack"

# Refresh cadence of the interactive view, in seconds
DEFAULT_REFRESH_INTERVAL = 1.0
DEFAULT_BLINK_INTERVAL = 0.5


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_dir: Path
    log_level: int = logging.INFO
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    blink_interval: float = DEFAULT_BLINK_INTERVAL


def load_settings(data_file: Path | str | None = None) -> Settings:
    """Build Settings from the environment; an explicit data_file wins."""
    if data_file is not None:
        resolved = Path(data_file).expanduser()
    else:
        resolved = _env_path(_k("DATA_FILE"), DEFAULT_DATA_FILE)

    return Settings(
        data_file=resolved,
        log_dir=_env_path(_k("LOG_DIR"), DEFAULT_LOG_DIR),
        log_level=_env_level(_k("LOG_LEVEL"), logging.INFO),
        refresh_interval=_env_float(_k("REFRESH_INTERVAL"), DEFAULT_REFRESH_INTERVAL),
        blink_interval=_env_float(_k("BLINK_INTERVAL"), DEFAULT_BLINK_INTERVAL),
    )
