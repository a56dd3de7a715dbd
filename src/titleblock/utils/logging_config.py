"""
Logging configuration and management.

This module provides root logger setup with standard, detailed or JSON
formats, an optional (rotating) log file and an optional pre-built console
handler such as rich's ``RichHandler``.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Look up a level by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


# LogRecord attributes that are not user-supplied extras
_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'message', 'taskName',
})


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "message": record.getMessage(),
            "logger": record.name,
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr_name, attr_value in record.__dict__.items():
            if attr_name.startswith('_') or attr_name in _STANDARD_ATTRS or callable(attr_value):
                continue
            log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


class LoggingManager:
    """
    Root logger configuration.

    Args:
        log_level: Minimum level for the root logger and its handlers
        log_format: Format of the plain console handler and the file handler
        log_file: Optional log file
        enable_console: Add a console handler
        console_handler: Console handler to install instead of a plain StreamHandler
        enable_rotation: Use a RotatingFileHandler for ``log_file``
        max_file_size: Rotation size such as "10MB", "512KB" or a byte count
        backup_count: Number of rotated files to keep
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_format: LogFormat = LogFormat.STANDARD,
        log_file: Optional[Union[str, Path]] = None,
        enable_console: bool = True,
        console_handler: Optional[logging.Handler] = None,
        enable_rotation: bool = False,
        max_file_size: str = "10MB",
        backup_count: int = 5
    ) -> None:
        self.log_level = log_level
        self.log_format = log_format
        self.log_file = Path(log_file) if log_file else None
        self.enable_console = enable_console
        self.console_handler = console_handler
        self.enable_rotation = enable_rotation
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        self._setup_root_logger()

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        console_handler: Optional[logging.Handler] = None,
        log_level: Optional[LogLevel] = None
    ) -> "LoggingManager":
        """
        Build a manager from the ``logging`` section of a configuration dict.

        Args:
            config: Full configuration dictionary
            console_handler: Console handler to install
            log_level: Overrides the configured level
        """
        section = config.get("logging") or {}
        return cls(
            log_level=log_level or LogLevel.from_name(section.get("level", "WARNING")),
            log_format=LogFormat(section.get("format", LogFormat.STANDARD.value)),
            log_file=section.get("file"),
            console_handler=console_handler,
        )

    def _setup_root_logger(self) -> None:
        """Replace the root logger's handlers according to the settings."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)
        root_logger.handlers.clear()

        formatter = self._create_formatter()

        if self.enable_console:
            if self.console_handler is not None:
                handler = self.console_handler
            else:
                handler = logging.StreamHandler()
                handler.setFormatter(formatter)
            handler.setLevel(self.log_level.value)
            root_logger.addHandler(handler)

        if self.log_file:
            file_handler = self._create_file_handler()
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    def _create_formatter(self) -> logging.Formatter:
        if self.log_format == LogFormat.JSON:
            return JSONFormatter()
        if self.log_format == LogFormat.DETAILED:
            return logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def _create_file_handler(self) -> logging.Handler:
        """Create appropriate file handler based on rotation settings."""
        if not self.enable_rotation:
            return logging.FileHandler(self.log_file, encoding="utf-8")

        return logging.handlers.RotatingFileHandler(
            filename=self.log_file,
            maxBytes=parse_size(self.max_file_size),
            backupCount=self.backup_count,
            encoding="utf-8"
        )

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)


def parse_size(size: str) -> int:
    """Convert "10MB", "512KB", "1GB" or a plain byte count to bytes."""
    size = size.strip().upper()
    for suffix, factor in (("KB", 1024), ("MB", 1024 ** 2), ("GB", 1024 ** 3)):
        if size.endswith(suffix):
            return int(size[:-2]) * factor
    return int(size)
