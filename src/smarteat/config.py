"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from smarteat.schemas import RecipeSearchFilters


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SMARTEAT_",
        extra="ignore",
    )

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = ""  # "json" or "text"; empty means auto-detect

    # Recipe suggestions
    expiration_threshold_days: int = Field(7, ge=0)
    expiration_weight_multiplier: float = Field(0.3, ge=0.0)
    fuzzy_match_threshold: float = Field(85.0, ge=0.0, le=100.0)

    # Post-shopping scanning
    auto_confirm_threshold: float = Field(0.8, ge=0.0, le=1.0)
    default_scanned_unit: str = "piece"
    require_expiry_confirmation: bool = True

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    def default_filters(self, **overrides) -> RecipeSearchFilters:
        """Build search filters seeded with the configured expiration tuning."""
        values = {
            "expiration_threshold": self.expiration_threshold_days,
            "expiration_weight_multiplier": self.expiration_weight_multiplier,
        }
        values.update(overrides)
        return RecipeSearchFilters(**values)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
