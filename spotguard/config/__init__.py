"""
Configuration Utilities for spotguard

Environment settings and logging setup shared by the agent and its services.
"""

from .settings import Settings, get_settings, DEFAULT_CHECK_INTERVAL_SECONDS
from .logging_config import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_CHECK_INTERVAL_SECONDS",
    "setup_logging",
]
