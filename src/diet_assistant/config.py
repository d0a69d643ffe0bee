"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path(".")
    basic_foods_file: str = "basic_foods.json"
    composite_foods_file: str = "composite_foods.json"
    daily_logs_file: str = "daily_logs.json"
    profile_file: str = "user_profile.json"
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    undo_history_limit: int = 100
    default_calculation_method: str = "harris-benedict"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="DIET_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def data_path(self, filename: str) -> Path:
        """Resolve a data file name against the data directory."""
        return self.data_dir / filename


def lookup_enabled(api_key: str | None) -> bool:
    """Return True when an FDC API key is configured."""
    return bool(api_key and api_key.strip())
