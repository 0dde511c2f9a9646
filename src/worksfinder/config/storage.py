"""Locations of the discovery database and the on-disk HTTP cache."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from .env import optional_env_var

DATABASE_FILENAME: Final[str] = "worksfinder.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


def data_dir(*, create: bool = True) -> Path:
    """``WORKSFINDER_DATA_DIR`` or the platform's per-user data directory."""

    configured = optional_env_var("WORKSFINDER_DATA_DIR")
    path = Path(configured) if configured else _platform_data_root() / "worksfinder"
    path = path.expanduser().resolve()
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def database_uri() -> str:
    """``DATABASE_URI`` when set, else a SQLite file in the data directory."""

    override = optional_env_var("DATABASE_URI")
    if override is not None:
        return override
    return f"sqlite+pysqlite:///{data_dir() / DATABASE_FILENAME}"


def http_cache_path(*, create: bool = True) -> Path:
    return data_dir(create=create) / HTTP_CACHE_FILENAME


def _platform_data_root() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"
