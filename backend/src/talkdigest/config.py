"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from typing import Optional
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Mailbox credentials
    and an LLM API key MUST be set for a working deployment.

    Environment Variables:
        IMAP_HOST / IMAP_PORT / IMAP_USER / IMAP_PASSWORD: Mailbox account
        IMAP_MAILBOX: Mailbox to read (default INBOX)
        MAIL_SEARCH_DAYS: Search window in days (default 7)
        MAIL_FETCH_LIMIT: Max messages retrieved per fetch cycle (default 10)
        MAIL_RETRY_DELAY_SECONDS: Fixed reconnect backoff (default 30)
        MAIL_MAX_CONNECT_ATTEMPTS: Consecutive failures before giving up (default 5)
        FETCH_INTERVAL_SECONDS: Periodic fetch interval
        LLM_PROVIDER: 'anthropic' or 'openai'
        ANTHROPIC_API_KEY / OPENAI_API_KEY: Provider credentials
        OCR_LANGUAGES: Tesseract language hint (default swe+eng)
        LOG_LEVEL: Logging level (default INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Mailbox (IMAP)
    IMAP_HOST: str = "localhost"
    IMAP_PORT: int = 993
    IMAP_USER: str = ""
    IMAP_PASSWORD: str = ""
    IMAP_MAILBOX: str = "INBOX"
    IMAP_TIMEOUT_SECONDS: float = 60.0
    IMAP_VERIFY_TLS: bool = True

    # Fetch cycle
    MAIL_SEARCH_DAYS: int = Field(7, ge=0)
    MAIL_FETCH_LIMIT: int = Field(10, gt=0)
    MAIL_RETRY_DELAY_SECONDS: float = Field(30.0, ge=0)
    MAIL_MAX_CONNECT_ATTEMPTS: int = Field(5, gt=0)
    MAIL_AUTO_CONNECT: bool = True
    MAIL_AUTO_CONNECT_DELAY_SECONDS: float = 5.0
    FETCH_INTERVAL_SECONDS: Optional[int] = None

    # AI Providers
    LLM_PROVIDER: str = "anthropic"
    ANTHROPIC_API_KEY: Optional[str] = None
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    SUMMARY_MAX_TOKENS: int = 2000
    SUMMARY_LANGUAGE: str = "Swedish"
    SUMMARY_ORGANIZATION: str = "Rotary Club"

    # Attachment analysis
    OCR_LANGUAGES: str = "swe+eng"
    OCR_MAX_EDGE_PX: int = 1200
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_SIZE_BYTES: int = Field(50 * 1024 * 1024, gt=0)  # 50 MB
    MAX_UPLOAD_FILES: int = Field(10, gt=0)

    # Publishing (simulated)
    PUBLISH_SIMULATION_DELAY_SECONDS: float = 1.5

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"

    @model_validator(mode="after")
    def _default_fetch_interval(self) -> "Settings":
        # Production polls every 10 minutes, everything else every 2
        if self.FETCH_INTERVAL_SECONDS is None:
            self.FETCH_INTERVAL_SECONDS = 600 if self.is_production else 120
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
