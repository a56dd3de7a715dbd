"""
Exceptions package for titleblock.

Configuration errors raised while loading settings. Front matter
processing itself never lets an exception escape; see
``core.document_processor.front_matter``.
"""

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
]
