"""
Runtime settings for the FurAffinity extractor.

Values are read from ``FURAFFINITY_*`` environment variables (or a local
``.env`` file) and validated by pydantic.  Call :func:`get_settings` once at
start‑up and pass the result down – nothing in the package reads settings
behind the caller's back.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Transport and extraction settings, overridable via environment."""

    model_config = SettingsConfigDict(
        env_prefix="FURAFFINITY_",
        env_file=".env",
        extra="ignore",
    )

    # Site
    BASE_URL: str = Field(
        default="https://www.furaffinity.net",
        description="Root of the site; pages are addressed as / and /view/<id>/",
    )

    # Session – the two login cookies the site issues
    COOKIE_A: str = Field(default="", description="Value of the 'a' cookie")
    COOKIE_B: str = Field(default="", description="Value of the 'b' cookie")
    USER_AGENT: str = Field(
        default="furextract/0.1 (+https://github.com/furextract/furextract)",
        description="User-Agent header sent with every request",
    )
    TIMEOUT: float = Field(default=10.0, gt=0, description="Request timeout in seconds")

    # Extraction
    SELECTOR_PROFILE: str = Field(
        default="current",
        description="Name of the selector profile in selectors.yaml",
    )
    SELECTORS_PATH: Optional[Path] = Field(
        default=None,
        description="Alternative selectors.yaml; the packaged file is used when unset",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")


def get_settings() -> Settings:
    """Build a fresh, validated :class:`Settings` from the environment."""
    return Settings()
