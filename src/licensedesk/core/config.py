"""
Application Configuration

Settings are read from environment variables (and an optional .env file)
via pydantic-settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the proxy service and the intake client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    python_env: str = "development"
    log_level: str = "INFO"

    # External script endpoint (spreadsheet backend)
    apps_script_url: str = ""

    # Media host credentials; all three must be set for direct uploads
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    media_folder_prefix: str = "driving_school"

    # None disables the outbound timeout entirely
    upstream_timeout_seconds: float | None = None

    cors_origins: str = "http://localhost:3000"

    # Admin gate password. Compared client-side only, not an auth mechanism.
    admin_password: str = ""

    # Where the intake client finds the proxy
    proxy_base_url: str = "http://localhost:8000"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def has_media_credentials(self) -> bool:
        """True when direct uploads to the media host are possible."""
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
