"""Configuration management for the Reading Tracker API."""
import os
from datetime import date
from typing import Optional
from urllib.parse import urlparse
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    app_name: str = Field(default="Reading Tracker API")
    debug: bool = Field(default=False)

    # Database Configuration (Heroku compatible)
    database_url: str = Field(default="")
    db_name: str = Field(default="")
    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)

    # Authentication Configuration
    secret_key: str = Field(
        default="your-secret-key-change-this-in-production-use-openssl-rand-hex-32",
    )
    access_token_expire_minutes: int = Field(default=60 * 24 * 7)
    auth_cookie_name: str = Field(default="reading_tracker_auth")
    auth_cookie_domain: str = Field(default="")
    auth_cookie_secure: bool = Field(default=False)
    auth_cookie_samesite: str = Field(default="lax")
    auth_cookie_max_age: int = Field(default=60 * 60 * 24 * 7)

    # Reading plan
    plan_length_days: int = Field(default=365)
    plan_timezone: str = Field(default="UTC")
    plan_start_date: Optional[date] = Field(default=None)

    # Export
    export_filename_prefix: str = Field(default="reading_tracker_export")

    # CORS Configuration
    @computed_field
    @property
    def allowed_origins(self) -> list[str]:
        """Parse allowed origins from environment variable or use defaults."""
        allowed_origins_str = os.getenv(
            "ALLOWED_ORIGINS",
            "http://localhost:5173,http://localhost:3000"
        )
        origins = [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]

        # Add bare/WWW variants for https origins
        normalized = set(origins)
        for origin in list(origins):
            if origin.startswith("https://www."):
                normalized.add(origin.replace("https://www.", "https://", 1))
            elif origin.startswith("https://") and not origin.split("//", 1)[1].startswith("www."):
                host = origin.split("//", 1)[1]
                normalized.add(f"https://www.{host}")

        return sorted(normalized)

    @property
    def db_config(self) -> dict:
        """Get database configuration, preferring DATABASE_URL for Heroku."""
        if self.database_url and self.database_url.strip():
            # Parse Heroku DATABASE_URL
            parsed = urlparse(self.database_url)
            return {
                'dbname': parsed.path[1:],  # Remove leading slash
                'user': parsed.username,
                'password': parsed.password,
                'host': parsed.hostname,
                'port': parsed.port or 5432
            }
        elif self.db_name.strip() and self.db_user.strip():
            return {
                'dbname': self.db_name,
                'user': self.db_user,
                'password': self.db_password,
                'host': self.db_host,
                'port': self.db_port
            }
        else:
            # Fallback configuration for development
            return {
                'dbname': 'reading_tracker',
                'user': 'postgres',
                'password': 'postgres',
                'host': 'localhost',
                'port': 5432
            }

    model_config = SettingsConfigDict(
        env_file=None,  # Don't load from .env file
        case_sensitive=False,
        extra="ignore"
    )

def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
