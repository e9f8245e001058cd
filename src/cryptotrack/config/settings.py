"""Application settings and configuration."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COINGECKO_URL = "https://api.coingecko.com/api/v3"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "CryptoTrack"
    app_version: str = "1.0.0"

    # "production" hides the admin cache endpoints
    environment: Literal["development", "production"] = "development"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./cryptotrack.db"

    # Market data settings
    market_data_provider: Literal["coingecko", "stub"] = "coingecko"
    market_data_base_url: str = DEFAULT_COINGECKO_URL
    market_data_timeout_seconds: float = 10.0
    market_data_cache_ttl_seconds: float = 60.0
    market_data_user_agent: str = "CryptoTrack/1.0"
    serve_stale_prices_on_error: bool = False

    default_currency: str = "usd"

    # Parallel per-holding writes during revaluation
    batch_write_max_workers: int = 8

    @property
    def is_production(self) -> bool:
        """Return True when running in production mode."""
        return self.environment == "production"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and bootstrap)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
