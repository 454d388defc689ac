# src/queue_timer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
- Malformed values fall back to defaults instead of crashing the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "QTIMER"

# Fixed tick cadence of the countdown (not configurable).
TICK_SECONDS = 1.0

# Upper bound on how long the main loop waits for a command before re-checking the timer.
DEFAULT_IDLE_POLL_SECONDS = 0.1


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    history_path: Path

    # ---- Main loop ----
    idle_poll_seconds: float

    # ---- Console ----
    color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "queue-timer").strip() or "queue-timer"
        # Console handler level; the log file always gets DEBUG.
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/queue_timer"))
        history_path = _env_path(_k("HISTORY_PATH"), Path("timer_history.log"))

        idle_poll_seconds = _env_float(_k("IDLE_POLL_SECONDS"), DEFAULT_IDLE_POLL_SECONDS)
        color = _env_bool(_k("COLOR"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            history_path=history_path,
            idle_poll_seconds=idle_poll_seconds,
            color=color,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading .env and the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
