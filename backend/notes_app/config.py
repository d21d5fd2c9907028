"""
Notes App Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the store dependency and the launcher.
When:  Loaded once at module import time.

Environment:
    PORT       HTTP port (default 3000)
    HOST       Bind address (default 0.0.0.0)
    DATA_FILE  Path of the JSON file holding every note (default notes.json)
    LOG_LEVEL  DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running from a checkout.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # ── Storage ───────────────────────────────────────────────────────────
    # What: The single file that is the whole persistence layer.
    # Relative paths resolve against the process working directory.
    data_file: str = Field(
        default="notes.json",
        description="Path of the JSON file holding the note collection",
    )

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
        "extra": "ignore",  # .env may carry variables meant for other tools
    }


# Singleton instance, imported throughout the application
settings = Settings()
