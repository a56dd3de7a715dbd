"""
Environment variable handling for configuration management.

This module provides environment variable overrides and type conversion
for the titleblock configuration system.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize environment handler.

        Args:
            environ: Environment to read from (default: os.environ)
        """
        self.environ = environ
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var names to (config key, target type)
        """
        return {
            "TITLEBLOCK_LOG_LEVEL": ("logging.level", "level"),
            "TITLEBLOCK_LOG_FORMAT": ("logging.format", "string"),
            "TITLEBLOCK_MARKER": ("front_matter.marker", "string"),
            "TITLEBLOCK_MIN_MARKERS": ("front_matter.min_markers", "integer"),
        }

    def getenv(self, name: str) -> Optional[str]:
        environ = os.environ if self.environ is None else self.environ
        return environ.get(name)

    def convert_env_value(self, var_name: str, value: str, target_type: str = "string") -> Any:
        """
        Convert environment variable string to appropriate Python type.

        Args:
            var_name: Environment variable name, for error reporting
            value: Environment variable value (always string)
            target_type: Target type ('string', 'level', 'integer', 'boolean')

        Returns:
            Converted value

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        value = value.strip()
        if target_type == "integer":
            try:
                return int(value)
            except ValueError as e:
                raise EnvironmentVariableError(var_name, value, "an integer") from e
        if target_type == "boolean":
            return value.lower() in ("true", "1", "yes", "on", "enabled")
        if target_type == "level":
            return value.upper()
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary

        Returns:
            New configuration with environment overrides applied

        Raises:
            EnvironmentVariableError: If a set variable cannot be converted
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = self.getenv(env_var)
            if env_value is None or not env_value.strip():
                continue
            converted_value = self.convert_env_value(env_var, env_value, target_type)
            self._set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        """
        Set a nested value in configuration using dot notation.

        Args:
            config: Configuration dictionary to modify
            key_path: Dot-separated key path (e.g., 'front_matter.marker')
            value: Value to set
        """
        keys = key_path.split(".")
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value
