"""Configuration package."""

from queuekit.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
