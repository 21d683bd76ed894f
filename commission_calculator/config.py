"""
Calculator configuration using pydantic-settings.
Settings are loaded from environment variables prefixed with COMMISSION_.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file (commission_calculator/)
PACKAGE_DIR = Path(__file__).resolve().parent
# Project root is one level up
PROJECT_ROOT = PACKAGE_DIR.parent
# .env file path
ENV_FILE = PROJECT_ROOT / ".env"

# Load .env file into environment variables BEFORE pydantic-settings reads them
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Settings(BaseSettings):
    """Calculator settings."""

    model_config = SettingsConfigDict(
        env_prefix="COMMISSION_",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Total line code that is always part of the taxable base
    base_total_code: str = "subtotal"

    # Opt-in: compare greater/less operators as decimals when both sides are numeric.
    # Off by default, attribute values are compared as strings.
    numeric_condition_comparison: bool = False

    @field_validator("base_total_code", mode="before")
    @classmethod
    def normalize_base_total_code(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("base_total_code must not be empty")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
