"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Flock context
    default_bird_age_days: int = 21
    clamp_negative_age: bool = False

    # Risk evaluation policy
    strict_gas_bands: bool = False

    # Activity history
    activity_log_max_len: int = 10

    # Service
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
