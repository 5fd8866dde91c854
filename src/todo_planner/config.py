# src/todo_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a local default, so the service starts with no env at all.
- Components receive settings by injection; get_settings() is only used by the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- HTTP ----
    host: str
    port: int
    web_dir: Path | None

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_file: Path

    # ---- Task list ----
    list_limit: int

    @staticmethod
    def from_env() -> "Settings":
        load_dotenv(override=False)

        app_name = _env(_k("APP_NAME"), "todo-planner") or "todo-planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "0.0.0.0")
        port = _env_int(_k("PORT"), 7540)
        web_dir = _env_path(_k("WEB_DIR"), None)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo")) or Path(".local/todo")
        db_file = _env_path(_k("DBFILE"), data_dir / "scheduler.db") or data_dir / "scheduler.db"

        list_limit = _env_int(_k("LIST_LIMIT"), 50)
        if list_limit <= 0:
            list_limit = 50

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            web_dir=web_dir,
            data_dir=data_dir,
            db_file=db_file,
            list_limit=list_limit,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
