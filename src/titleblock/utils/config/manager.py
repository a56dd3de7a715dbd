"""
Main configuration manager for titleblock.

This module provides the ConfigManager class that orchestrates loading,
default merging, environment variable overrides and validation.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions.config_exceptions import ConfigurationFileNotFoundError
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "0.1.0",
    "logging": {
        "level": "WARNING",
        "format": "standard",
        "file": None,
    },
    "front_matter": {
        "marker": "-",
        "min_markers": 3,
    },
}


class ConfigManager:
    """
    Configuration manager for titleblock.

    Handles loading, validation, and merging of configuration from multiple sources:
    - Built-in defaults
    - The JSON configuration file
    - Environment variables (including a .env file)
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file (default: titleblock.config.json).
                An explicitly named file must exist; the default file is optional.
            project_root: Project root directory (default: current working directory)
            load_env: Whether to load environment variables from .env file
            environ: Environment to read overrides from (default: os.environ)
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_file = config_file is not None
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False
        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.env_handler = EnvironmentHandler(environ)
        self.schema_validator = SchemaValidator()

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against the schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicitly named file is missing
            ConfigurationError: If the file cannot be parsed
            ConfigurationValidationError: If validation fails
            EnvironmentVariableError: If an override cannot be converted
        """
        if self._loaded and not force_reload:
            return deepcopy(self._config)

        try:
            file_config = self.file_ops.load_json_file(self.config_file)
            self.logger.debug(f"Loaded configuration file {self.config_file}")
        except ConfigurationFileNotFoundError:
            if self.explicit_file:
                raise
            self.logger.debug(f"No {self.config_file} found, using built-in defaults")
            file_config = {}

        merged_config = self.deep_merge_dicts(DEFAULT_CONFIG, file_config)
        config = self.env_handler.apply_environment_overrides(merged_config)

        if validate:
            self.schema_validator.validate_config(config, self.config_file)

        self._config = config
        self._loaded = True
        return deepcopy(self._config)

    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (supports dot notation like 'front_matter.marker')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config
        try:
            for k in key.split("."):
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def reset(self) -> None:
        """Reset configuration state, forcing reload on next access."""
        self._config = {}
        self._loaded = False

    @staticmethod
    def deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge two dictionaries, with override values taking precedence.

        Args:
            base: Base dictionary
            override: Override dictionary (values take precedence)

        Returns:
            Merged dictionary
        """
        result = deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigManager.deep_merge_dicts(result[key], value)
            else:
                result[key] = deepcopy(value)

        return result
