from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    PROJECT_NAME: str = "Inventory service"
    API_PREFIX: str = ""

    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # Photos live in <CACHE_DIR>/uploads, the flat-file store in <CACHE_DIR>/inventory.json
    CACHE_DIR: str = "./cache"
    STORAGE_BACKEND: Literal["json", "sql"] = "json"
    DATABASE_URL: str | None = None

    # Base for photo links, e.g. "http://inventory.local:3000". Derived from the request when unset.
    PUBLIC_BASE_URL: str | None = None

    LOG_LEVEL: str = "INFO"
    SQLALCHEMY_LOG_LEVEL: str = "WARNING"
    UVICORN_ACCESS_LOG: bool = False
    REQUEST_LOGS_ENABLED: bool = True

    SWEEP_ORPHANS_ON_STARTUP: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cache_path(self) -> Path:
        return Path(self.CACHE_DIR)

    @property
    def uploads_dir(self) -> Path:
        return self.cache_path / "uploads"

    @property
    def inventory_file(self) -> Path:
        return self.cache_path / "inventory.json"

    @property
    def sqlalchemy_database_uri(self) -> str:
        """Build the SQLAlchemy database URI."""
        if self.DATABASE_URL is not None:
            return str(self.DATABASE_URL)
        return f"sqlite+aiosqlite:///{(self.cache_path / 'inventory.db').as_posix()}"


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return cached settings object to avoid re-parsing env vars."""
    return Settings()
