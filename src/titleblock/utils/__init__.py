"""
Utilities package for titleblock.

This package contains configuration and logging helpers used by the CLI.
"""

from .config import ConfigManager, ConfigPaths
from .logging_config import LogFormat, LoggingManager, LogLevel

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "LogFormat",
    "LoggingManager",
    "LogLevel",
]
