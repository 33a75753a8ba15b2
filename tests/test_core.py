"""Tests for core modules."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from inventory.core.config import Settings
from inventory.core.exceptions import (
    AppException,
    NotFoundError,
    RepositoryError,
    StorageError,
    ValidationError,
)
from inventory.core.logging_config import configure_logging, get_request_logs_status, set_request_logs_enabled
from inventory.services.factory import build_repository
from inventory.crud.crud_item import CRUDItem
from inventory.crud.crud_item_json import JsonItemStore


class TestSettings:
    """Tests for settings configuration."""

    def test_defaults(self):
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.STORAGE_BACKEND == "json"
        assert settings.API_PREFIX == ""
        assert isinstance(settings.PORT, int)

    def test_cache_layout(self):
        settings = Settings(CACHE_DIR="/srv/cache", _env_file=None)  # type: ignore[call-arg]

        assert settings.uploads_dir == Path("/srv/cache/uploads")
        assert settings.inventory_file == Path("/srv/cache/inventory.json")

    def test_database_uri_defaults_to_sqlite_in_cache(self):
        settings = Settings(CACHE_DIR="/srv/cache", DATABASE_URL=None, _env_file=None)  # type: ignore[call-arg]

        assert settings.sqlalchemy_database_uri == "sqlite+aiosqlite:////srv/cache/inventory.db"

    def test_database_url_override(self):
        url = "postgresql+asyncpg://inv:inv@db/inventory"
        settings = Settings(DATABASE_URL=url, _env_file=None)  # type: ignore[call-arg]

        assert settings.sqlalchemy_database_uri == url

    def test_unknown_backend_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(STORAGE_BACKEND="redis", _env_file=None)  # type: ignore[call-arg]


class TestBuildRepository:
    def test_json_backend(self, tmp_path: Path):
        settings = Settings(CACHE_DIR=str(tmp_path), STORAGE_BACKEND="json", _env_file=None)  # type: ignore[call-arg]

        repo = build_repository(settings)

        assert isinstance(repo, JsonItemStore)
        assert repo.path == tmp_path / "inventory.json"

    def test_sql_backend(self, tmp_path: Path):
        settings = Settings(CACHE_DIR=str(tmp_path), STORAGE_BACKEND="sql", DATABASE_URL=None, _env_file=None)  # type: ignore[call-arg]

        repo = build_repository(settings)

        assert isinstance(repo, CRUDItem)


class TestExceptions:
    """Tests for custom exceptions."""

    def test_app_exception(self):
        error = AppException(message="Test error", code="TEST_ERROR")
        assert error.message == "Test error"
        assert error.code == "TEST_ERROR"
        assert str(error) == "Test error"

    def test_client_errors(self):
        assert ValidationError().status_code == 400
        assert NotFoundError().status_code == 404
        assert NotFoundError().message == "Inventory with this id not found"

    def test_server_errors(self):
        assert StorageError().status_code == 500
        assert RepositoryError().status_code == 500
        assert StorageError().code != RepositoryError().code

    def test_details(self):
        error = ValidationError("Name required", details={"field": "inventory_name"})
        assert error.details == {"field": "inventory_name"}
        assert "Name required" in repr(error)


class TestLogging:
    def test_http_client_loggers_are_quiet(self):
        configure_logging(Settings(LOG_LEVEL="INFO", _env_file=None))  # type: ignore[call-arg]

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
        assert logging.getLogger("inventory").getEffectiveLevel() == logging.INFO

    def test_request_logs_toggle(self):
        try:
            assert set_request_logs_enabled(False) == {"enabled": False}
            assert get_request_logs_status() == {"enabled": False}
        finally:
            set_request_logs_enabled(True)
        assert get_request_logs_status() == {"enabled": True}
