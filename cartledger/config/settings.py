"""
Configuration Management for the Cart Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Only deployment concerns are configurable (where the
ledger lives, how loudly we log). The currency table is a fixed constant
in the models package and deliberately not exposed here.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CartSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from CART_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    ledger_path: Path = Field(
        default=Path("tmp/cart.txt"),
        description="Path to the append-only ledger file"
    )
    
    # Logging goes to stderr, CLI output to stdout
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for structured log output"
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Renderer used for structured log lines"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> CartSettings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return CartSettings()
