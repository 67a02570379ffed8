"""Configuration management for the Prompt Gateway Service.

Uses Pydantic Settings for type-safe configuration with .env file support.
All sensitive values are loaded from environment variables. Settings are
frozen once built and handed to the app factory explicitly.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # LLM API
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None

    # Service Configuration
    host: str = "127.0.0.1"
    port: int = 8787
    allowed_origins: str = "http://localhost:3000"
    max_body_bytes: int = 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def has_model(self) -> bool:
        return bool(self.openai_model)

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse allowed origins as list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
