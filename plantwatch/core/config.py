"""PlantWatch configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./plantwatch.db"

    # Weather
    weather_api_base: str = "https://historical-forecast-api.open-meteo.com/v1"
    weather_timeout_seconds: float = 10.0

    # HTTP
    cors_origins: list[str] = ["*"]

    # General
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {
        "env_file": ".env",
        "env_prefix": "PLANTWATCH_",
        "extra": "ignore",
    }


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
