from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from hotzone.config import StorageConfig, get_database_config, get_storage_config, storage


def test_storage_config_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("HOTZONE_DATA_DIR", str(custom))

    config = get_storage_config()

    assert config.root == custom.resolve()


def test_storage_config_falls_back_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("HOTZONE_DATA_DIR", raising=False)
    monkeypatch.setattr(storage.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.root == (tmp_path / storage.APP_DIR_NAME).resolve()


def test_database_config_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_config_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("HOTZONE_DATA_DIR", str(tmp_path / "data-dir"))

    uri = get_database_config().uri

    expected_path = (tmp_path / "data-dir" / storage.DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_export_dir_is_created_under_data_dir(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "data")

    export_dir = config.export_dir()

    assert export_dir == (tmp_path / "data" / storage.EXPORT_DIR_NAME).resolve()
    assert export_dir.is_dir()
