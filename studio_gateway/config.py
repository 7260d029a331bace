"""
Configuration management for the studio gateway.
Uses Pydantic Settings for environment variable management.
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "G-Limit Studio Gateway"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "API proxy, booking mail and chatbot for the studio website"

    # Deployment environment ("production" turns on secure cookies)
    ENVIRONMENT: str = "development"

    # CORS Configuration
    # Credentials (the admin cookie) are sent cross-origin, so origins must be explicit
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://glimitstudio.com",
    ]

    # Laravel content API
    # The NEXT_PUBLIC_* names are still accepted so existing .env files keep working
    API_URL: str = Field(
        default="http://localhost:8000/api",
        validation_alias=AliasChoices("API_URL", "NEXT_PUBLIC_API_URL"),
    )
    API_IMG_URL: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("API_IMG_URL", "NEXT_PUBLIC_API_IMG"),
    )
    BACKEND_TIMEOUT: float = 15.0  # seconds, per upstream call

    # Public site
    SITE_URL: str = Field(
        default="https://glimitstudio.com",
        validation_alias=AliasChoices("SITE_URL", "NEXT_PUBLIC_SITE_URL"),
    )
    STUDIO_NAME: str = "G-Limit Studio"

    # Admin session cookie (token is issued by the backend on login)
    ADMIN_COOKIE_NAME: str = "admin_token"
    ADMIN_COOKIE_MAX_AGE: int = 60 * 60 * 24  # 1 day

    # Optional directory holding the built admin frontend, mounted at /admin
    ADMIN_STATIC_DIR: str = ""

    # SMTP Configuration for booking notifications
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_SECURE: bool = False  # True for implicit TLS (port 465)
    SMTP_USER: str = ""
    SMTP_PASS: str = ""
    SMTP_TIMEOUT: float = 30.0
    MAIL_SENDER_NAME: str = "G-Limit Photography"  # From name of the booking workflow emails
    ADMIN_EMAIL: str = ""

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env that aren't defined in Settings
        populate_by_name=True,
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance
settings = Settings()
