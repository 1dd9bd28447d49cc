"""Configuration package."""

from cartledger.config.settings import (
    CartSettings,
    get_settings,
)

__all__ = [
    "CartSettings",
    "get_settings",
]
