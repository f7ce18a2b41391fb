"""Configuration management for the ordinal tree engine."""

from .settings import Settings
from .settings import get_settings
from .settings import reset_settings
from .settings import resolve_root

__all__ = ["Settings", "get_settings", "reset_settings", "resolve_root"]
