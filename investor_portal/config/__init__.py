"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    SITE_URL: Optional[str] = None
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # ======================
    # Session
    # ======================
    AUTH_SECRET: Optional[str] = None
    SESSION_TTL_SECONDS: int = 60 * 60 * 24
    SESSION_COOKIE_NAME: str = "jbv_session"

    # ======================
    # Magic links
    # ======================
    MAGIC_LINK_TTL_SECONDS: int = 15 * 60
    TOKEN_STORE_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"

    # ======================
    # Investor registry (Airtable)
    # ======================
    AIRTABLE_API_KEY: Optional[str] = None
    AIRTABLE_BASE_ID: Optional[str] = None
    AIRTABLE_TABLE_ID: Optional[str] = None
    AIRTABLE_API_URL: str = "https://api.airtable.com/v0"

    # ======================
    # Email (SendGrid)
    # ======================
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_FROM_EMAIL: str = "jb@jbv.com"
    SENDGRID_FROM_NAME: str = "JBV Capital"
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"

    # ======================
    # Outbound calls
    # ======================
    INTEGRATION_TIMEOUT_SECONDS: float = 8.0
    INTEGRATION_RETRIES: int = 2
    INTEGRATION_BACKOFF_SECONDS: float = 0.2

    # ======================
    # User directory
    # ======================
    USER_DIRECTORY_JSON: Optional[str] = None

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"


settings = Settings()
