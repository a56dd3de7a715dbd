"""
Configuration-related exceptions for titleblock.

Every error names where the bad setting came from (a configuration file,
a ``front_matter.*`` or ``logging.*`` key, a ``TITLEBLOCK_*`` variable) and
carries a hint on how to fix it. ``str()`` gives the text the CLI prints.
"""

from typing import Dict, List, Optional

# configuration key -> what a valid value looks like
FIELD_HINTS: Dict[str, str] = {
    "front_matter.marker": 'a non-empty marker without whitespace, such as "-" or "+"',
    "front_matter.min_markers": "a whole number of marker units, 1 or more",
    "logging.level": "one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    "logging.format": "one of standard, detailed, json",
    "logging.file": "a file path, or null to log to the console only",
}


class ConfigurationError(Exception):
    """
    Base exception for configuration errors.

    Attributes:
        config_file: Configuration file involved, if any
        hints: Ways to fix the problem
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        hints: Optional[List[str]] = None
    ) -> None:
        super().__init__(message)
        self.config_file = config_file
        self.hints = list(hints or [])

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.config_file:
            lines.append(f"  in {self.config_file}")
        lines.extend(f"  hint: {hint}" for hint in self.hints)
        return "\n".join(lines)


class ConfigurationFileNotFoundError(ConfigurationError):
    """An explicitly requested configuration file does not exist."""

    def __init__(self, config_file: str) -> None:
        super().__init__(
            "Configuration file not found",
            config_file,
            ["omit --config-path to run with the built-in defaults"],
        )


class ConfigurationValidationError(ConfigurationError):
    """
    One or more configuration values are invalid.

    Attributes:
        problems: Dotted configuration key -> validation message, in key order
    """

    def __init__(self, problems: Dict[str, str], config_file: Optional[str] = None) -> None:
        self.problems = dict(problems)
        keys = ", ".join(self.invalid_fields) or "<root>"
        hints = [
            f"{key} must be {FIELD_HINTS[key]}"
            for key in self.invalid_fields if key in FIELD_HINTS
        ]
        super().__init__(f"Invalid configuration value for {keys}", config_file, hints)

    @property
    def invalid_fields(self) -> List[str]:
        """Dotted keys of the invalid values; the document root is excluded."""
        return [key for key in self.problems if key]

    def __str__(self) -> str:
        details = [f"  {key or '<root>'}: {message}" for key, message in self.problems.items()]
        return "\n".join([super().__str__(), *details])


class EnvironmentVariableError(ConfigurationError):
    """
    A ``TITLEBLOCK_*`` override cannot be converted to its setting's type.

    Attributes:
        variable_name: The offending environment variable
        value: Its raw value
    """

    def __init__(self, variable_name: str, value: str, expected: str) -> None:
        super().__init__(
            f"Environment variable {variable_name} must be {expected}, got '{value}'",
            hints=[f"correct or unset {variable_name} (process environment or .env file)"],
        )
        self.variable_name = variable_name
        self.value = value
