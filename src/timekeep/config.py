# src/timekeep/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every path is derived from a single data directory unless overridden.
- Nothing is created on disk at import time.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIMEKEEP"
APP_NAME = "timekeep"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def user_data_dir() -> Path:
    """Return a per-user data directory suitable for the platform."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
        return Path(base) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    base = os.environ.get("XDG_DATA_HOME") or (Path.home() / ".local" / "share")
    return Path(base) / APP_NAME


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- logging ----
    log_level: str
    log_to_file: bool

    # ---- local data paths ----
    data_dir: Path
    current_task_path: Path
    database_path: Path

    @property
    def log_file_path(self) -> Path:
        return self.data_dir / f"{APP_NAME}.log"

    @staticmethod
    def from_env() -> Settings:
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), user_data_dir())
        current_task_path = _env_path(_k("CURRENT_TASK_PATH"), data_dir / "current_task.json")
        database_path = _env_path(_k("DATABASE_PATH"), data_dir / f"{APP_NAME}.sqlite3")

        return Settings(
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            current_task_path=current_task_path,
            database_path=database_path,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # A local .env never overrides variables that are already exported.
    load_dotenv(override=False)
    return Settings.from_env()
