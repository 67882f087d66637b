# src/shared_tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read at import time; get_settings() builds and caches it on first use.
- Tests build Settings directly instead of touching the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASKLIST"


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

    # ---- Local data (ignored by git) ----
    data_dir: Path

    # ---- Task list ----
    default_list_id: str
    agent_name: str

    # ---- Connector flags ----
    console_enabled: bool

    @staticmethod
    def from_env(*, load_env_file: bool = True) -> Settings:
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/shared-tasklist"))

        return Settings(
            app_name=_env(_k("APP_NAME"), "shared-tasklist") or "shared-tasklist",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            default_list_id=_env(_k("DEFAULT_LIST_ID"), "default").strip() or "default",
            agent_name=_env(_k("AGENT_NAME"), "console").strip() or "console",
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
