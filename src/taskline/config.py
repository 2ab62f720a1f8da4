# src/taskline/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every variable has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLINE"


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


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


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
    log_dir: Path

    # ---- Connector flags ----
    server_enabled: bool
    console_enabled: bool

    # ---- TCP server ----
    host: str
    port: int
    max_line_bytes: int
    idle_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskline").strip() or "taskline"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskline"))

        server_enabled = _env_bool(_k("SERVER_ENABLED"), True)
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), False)

        host = _env(_k("HOST"), "127.0.0.1").strip() or "127.0.0.1"
        port = _env_int(_k("PORT"), 7070)
        if not 0 <= port <= 65535:
            port = 7070

        max_line_bytes = _env_int(_k("MAX_LINE_BYTES"), 4096)
        if max_line_bytes <= 0:
            max_line_bytes = 4096

        idle_timeout = max(0.0, _env_float(_k("IDLE_TIMEOUT"), 300.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            server_enabled=server_enabled,
            console_enabled=console_enabled,
            host=host,
            port=port,
            max_line_bytes=max_line_bytes,
            idle_timeout=idle_timeout,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
