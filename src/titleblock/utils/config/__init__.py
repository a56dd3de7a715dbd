"""Configuration management package.

This package provides the titleblock configuration system with support for:
- Built-in defaults merged under a JSON configuration file
- Environment variable overrides (and .env files)
- JSON schema validation

Usage:
    from titleblock.utils.config import ConfigManager

    config = ConfigManager()
    marker = config.get("front_matter.marker", "-")
"""

from .manager import DEFAULT_CONFIG, ConfigManager
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import CONFIG_SCHEMA, SchemaValidator
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'CONFIG_SCHEMA',
    'DEFAULT_CONFIG',
]
