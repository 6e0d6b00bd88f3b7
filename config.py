"""Application configuration."""
from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: str = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./katha.db"
    database_echo: bool = False

    # Settlement rules
    require_delivery_before_balance: bool = False
    driver_party_placeholder: str = "Driver"

    # Limits
    max_amount: Decimal = Decimal("10000000")
    max_material_weight: Decimal = Decimal("100")

    # Display
    display_timezone: str = "Asia/Kolkata"

    # Pagination
    default_page_size: int = 50
    max_page_size: int = 200

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.app_env == "testing"

    def validate_required_settings(self) -> list[str]:
        """
        Validate that all required settings are configured.

        Returns:
            List of missing or invalid settings
        """
        errors = []

        if not self.database_url:
            errors.append("DATABASE_URL is required")

        if self.max_amount <= 0:
            errors.append("max_amount must be positive")

        if self.max_material_weight <= 0:
            errors.append("max_material_weight must be positive")

        if not self.driver_party_placeholder.strip():
            errors.append("driver_party_placeholder must not be blank")

        if self.default_page_size <= 0 or self.default_page_size > self.max_page_size:
            errors.append("default_page_size must be between 1 and max_page_size")

        return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
