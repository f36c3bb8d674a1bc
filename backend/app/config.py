"""
PanelProxy Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Upstream API keys and the license whitelist live on the server only;
       the plugin panel never sees them.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
When:  Loaded once at module import time. Nothing here is mutated afterwards.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List, Tuple


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Missing upstream keys do NOT prevent startup: the affected endpoint answers
    500 "Server configuration error" until the key is provided.
    """

    # ── Google Gemini ─────────────────────────────────────────────────────
    # Required for /api/aiCommand
    gemini_api_key: str = Field(
        default="",
        description="Google Gemini API key used by the aiCommand endpoint"
    )
    gemini_model: str = Field(default="gemini-1.5-flash")

    # ── YouTube Data API v3 ───────────────────────────────────────────────
    # Required for /api/youtubeSearch
    youtube_api_key: str = Field(
        default="",
        description="YouTube Data API v3 key used by the youtubeSearch endpoint"
    )

    # ── Licensing ─────────────────────────────────────────────────────────
    # Comma-separated list of accepted bearer tokens, e.g. "tok-a, tok-b"
    license_tokens: str = Field(default="")

    # Must be set deliberately. With an empty whitelist this opens both
    # endpoints to anyone.
    development_mode: bool = Field(default=False)

    @property
    def license_whitelist(self) -> Tuple[str, ...]:
        """
        Splits LICENSE_TOKENS into an ordered, de-duplicated tuple.
        Blank entries (e.g. a trailing comma) are dropped.
        """
        tokens: List[str] = [t.strip() for t in self.license_tokens.split(",")]
        return tuple(dict.fromkeys(t for t in tokens if t))

    # ── Upstream HTTP ─────────────────────────────────────────────────────
    # Seconds; applied to both Gemini request options and the httpx client
    upstream_timeout: float = Field(default=60.0, gt=0, le=300)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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
        "case_sensitive": False,  # GEMINI_API_KEY and gemini_api_key both work
        "extra": "ignore",
    }

    def missing_upstream_keys(self) -> List[str]:
        """
        Names of upstream keys that are not configured.

        Only used for startup warnings. Request handlers never echo these
        names back to the client.
        """
        missing = []
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if not self.youtube_api_key:
            missing.append("YOUTUBE_API_KEY")
        return missing


# Singleton instance, imported throughout the application
settings = Settings()
