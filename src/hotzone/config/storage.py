"""Where hotzone keeps its database and exported workbooks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_value

APP_DIR_NAME: Final[str] = "hotzone"
DEFAULT_DB_FILENAME: Final[str] = "hotzone.db"
EXPORT_DIR_NAME: Final[str] = "exports"
DATA_DIR_ENV_VAR: Final[str] = "HOTZONE_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


def _in_dir(base: Path, *parts: str, ensure: bool) -> Path:
    target = base.joinpath(*parts)
    if ensure:
        target.parent.mkdir(parents=True, exist_ok=True)
    return target


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Layout below the data directory: ``hotzone.db`` plus an ``exports/`` folder."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    export_dir_name: str = EXPORT_DIR_NAME

    @property
    def root(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, ensure: bool = True) -> Path:
        return _in_dir(self.root, self.database_filename, ensure=ensure)

    def export_dir(self, *, ensure: bool = True) -> Path:
        export_dir = self.root / self.export_dir_name
        if ensure:
            export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        override, fallback = "LOCALAPPDATA", Path.home() / "AppData" / "Local"
    else:
        override, fallback = "XDG_DATA_HOME", Path.home() / ".local" / "share"
    configured = env_value(override)
    return Path(configured) if configured else fallback


def get_storage_config() -> StorageConfig:
    configured = env_value(DATA_DIR_ENV_VAR)
    data_dir = Path(configured) if configured else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` if set, otherwise SQLite inside the data directory."""

    uri = env_value(DATABASE_URI_ENV_VAR)
    if uri is None:
        uri = (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri)
