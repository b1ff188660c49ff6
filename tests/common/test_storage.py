from __future__ import annotations

from typing import TYPE_CHECKING

from projclaim.config import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def test_storage_config_uses_env_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PROJCLAIM_DATA_DIR", str(tmp_path))

    config = get_storage_config()

    assert config.data_dir == tmp_path
    assert config.database_path() == tmp_path.resolve() / "projclaim.db"


def test_database_uri_creates_data_dir(tmp_path: Path) -> None:
    data_dir = tmp_path / "nested"
    config = StorageConfig(data_dir=data_dir)

    uri = config.database_uri()

    assert data_dir.is_dir()
    assert uri == f"sqlite+pysqlite:///{data_dir.resolve() / 'projclaim.db'}"


def test_database_config_prefers_explicit_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config() == DatabaseConfig(uri="sqlite+pysqlite:///:memory:")


def test_database_config_falls_back_to_storage(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    config = get_database_config(storage=StorageConfig(data_dir=tmp_path))

    assert config.uri.endswith("projclaim.db")


def test_storage_config_defaults_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("PROJCLAIM_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert get_storage_config().data_dir == tmp_path / "projclaim"
