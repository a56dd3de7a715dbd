"""
Schema validation for configuration management.

The configuration schema is built in; validation uses jsonschema and
reports every violation at once.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import ConfigurationValidationError


logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMATS = ["standard", "detailed", "json"]

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "version": {"type": "string"},
        "logging": {
            "type": "object",
            "properties": {
                "level": {"enum": LOG_LEVELS},
                "format": {"enum": LOG_FORMATS},
                "file": {"type": ["string", "null"]},
            },
        },
        "front_matter": {
            "type": "object",
            "properties": {
                "marker": {"type": "string", "minLength": 1, "pattern": r"^\S+$"},
                "min_markers": {"type": "integer", "minimum": 1},
            },
        },
    },
}


class SchemaValidator:
    """
    Schema validation for configuration management.

    Args:
        schema: JSON schema to validate against (default: CONFIG_SCHEMA)
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        self.schema = schema or CONFIG_SCHEMA
        self.logger = logger

    def validate_config(self, config: Dict[str, Any], config_file: Optional[str] = None) -> bool:
        """
        Validate configuration against the schema.

        Args:
            config: Configuration dictionary to validate
            config_file: Configuration file name for error reporting

        Returns:
            True if validation passes

        Raises:
            ConfigurationValidationError: If validation fails
        """
        validator = jsonschema.Draft7Validator(self.schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: ".".join(str(p) for p in e.absolute_path))
        if not errors:
            return True

        problems: Dict[str, str] = {}
        for error in errors:
            field_path = ".".join(str(p) for p in error.absolute_path)
            if field_path in problems:
                problems[field_path] += f"; {error.message}"
            else:
                problems[field_path] = error.message

        self.logger.debug(f"Configuration validation failed with {len(errors)} error(s)")
        raise ConfigurationValidationError(problems, config_file)
