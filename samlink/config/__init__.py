"""Configuration module for samlink."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
