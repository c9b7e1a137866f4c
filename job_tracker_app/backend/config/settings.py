"""
Centralized configuration management for the Job Tracker application.
All environment variables and configuration settings are managed here.
"""
from typing import Optional, List
from pydantic import validator
from pydantic_settings import BaseSettings
from functools import lru_cache


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings with validation and type hints."""

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================
    app_name: str = "Job Tracker"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False

    # =============================================================================
    # SESSION SETTINGS
    # =============================================================================
    session_secret: Optional[str] = None
    session_cookie_name: str = "job_tracker.sid"
    session_ttl_days: int = 7

    # bcrypt cost factor used when hashing passwords
    bcrypt_rounds: int = 10

    @validator('session_ttl_days')
    def validate_session_ttl(cls, v):
        if v < 1:
            raise ValueError('Session TTL must be at least one day')
        return v

    @validator('bcrypt_rounds')
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError('bcrypt rounds must be between 4 and 31')
        return v

    # =============================================================================
    # DATABASE SETTINGS
    # =============================================================================
    database_url: Optional[str] = None
    database_echo: bool = False

    # =============================================================================
    # LOGGING SETTINGS
    # =============================================================================
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # =============================================================================
    # DEVELOPMENT SETTINGS
    # =============================================================================
    api_docs_enabled: bool = True
    cors_enabled: bool = True
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # =============================================================================
    # CONFIGURATION LOADING
    # =============================================================================
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.testing or self.environment.lower() == "testing"

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    def get_database_url(self) -> Optional[str]:
        """Get database URL with appropriate settings for environment."""
        if self.is_testing():
            return "sqlite://"
        return self.database_url

    def validate_required_settings(self) -> List[str]:
        """Validate that all required settings are properly configured."""
        missing = []

        if not self.database_url and not self.is_testing():
            missing.append("DATABASE_URL environment variable is not set")

        if not self.session_secret:
            missing.append("SESSION_SECRET environment variable is not set")

        if self.is_production():
            if self.session_secret and len(self.session_secret) < 32:
                missing.append("SESSION_SECRET must be at least 32 characters in production")

            if self.debug:
                missing.append("DEBUG must be False in production")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            missing.append(f"Invalid LOG_LEVEL: {self.log_level}")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    This function is cached to avoid recreating the settings object multiple times.
    """
    return Settings()
