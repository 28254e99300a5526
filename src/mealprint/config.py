"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Unit rendering
    default_unit_system: Literal["metric", "imperial"] = "metric"
    conversion_max_passes: int = Field(default=3, ge=1, le=10)

    # Weekly blueprints are generated for this many servings unless they say otherwise
    blueprint_default_servings: int = Field(default=4, ge=1)

    # Food lookup
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"
    food_lookup_timeout: float = 10.0  # request timeout in seconds
    food_lookup_max_retries: int = 3

    # Optional barcode providers, skipped while their credentials are blank
    upcitemdb_api_key: str = ""
    upcitemdb_api_host: str = "https://api.upcitemdb.com/prod/v1/lookup"
    nutritionix_app_id: str = ""
    nutritionix_api_key: str = ""
    nutritionix_base_url: str = "https://trackapi.nutritionix.com"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def origins(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

