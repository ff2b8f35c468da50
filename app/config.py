"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OSM API
    osm_api_url: str = "https://api.openstreetmap.org/api/0.6"
    request_timeout: float = 30.0
    user_agent: str = "osm-deep-history/0.1.0"

    # Outbound links
    user_url_template: str = "https://osm.org/user/{val}"
    changeset_url_template: str = "https://osm.org/changeset/{val}"

    # Rendering
    max_column_length: int = 20

    # Application
    debug: bool = False


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
