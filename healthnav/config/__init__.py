"""Configuration package."""

from healthnav.config.settings import Settings, TriageConfig, settings

__all__ = ["Settings", "TriageConfig", "settings"]
