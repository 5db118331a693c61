"""Core module for the URL shortener service."""

from shortify.core.config import Settings, settings
from shortify.core.logging import setup_logging

__all__ = ["Settings", "settings", "setup_logging"]
