from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub - personal access token with read:org scope (env: GITHUB_TOKEN)
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    user_agent: str = "aosc-kpi"

    # Crawl - maximum in-flight repository walks / membership checks
    concurrency: int = Field(default=4, ge=1)

    # HTTP transport
    request_timeout: float = 30.0
    connect_timeout: float = 5.0
    http2: bool = True

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def github_enabled(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)
