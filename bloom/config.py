"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

from bloom.cycles.settings_store import STORAGE_KEY


class Settings(BaseSettings):
    """All configuration is loaded from ``BLOOM_*`` environment variables (or .env file)."""

    # --- App ---
    app_name: str = "Bloom"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Storage ---
    storage_path: Path = Path.home() / ".bloom" / "storage.json"
    storage_key: str = STORAGE_KEY

    # --- Engine ---
    tracker_config_path: Path | None = None  # defaults to the bundled tracker_config.yaml

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_prefix": "BLOOM_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
