"""Settings package for YC Scout."""

from ycscout.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
