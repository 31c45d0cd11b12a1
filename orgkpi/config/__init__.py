"""Configuration package."""

from orgkpi.config.settings import Settings

__all__ = [
    "Settings",
]
