"""Application configuration utilities."""

from .logging import configure_logging
from .settings import DEFAULT_DEBOUNCE_MS, DEFAULT_MIN_VISIBLE_POINTS, Settings, get_settings

__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_MIN_VISIBLE_POINTS",
    "Settings",
    "configure_logging",
    "get_settings",
]
