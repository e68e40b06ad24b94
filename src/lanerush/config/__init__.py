"""Configuration for LANE RUSH."""

from .settings import CatchSettings, DodgeSettings, Settings, get_settings

__all__ = ["CatchSettings", "DodgeSettings", "Settings", "get_settings"]
