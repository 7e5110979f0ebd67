"""
Log level enumeration
"""

from enum import IntEnum
from typing import Dict, Union


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Values are compatible with Python's logging module.
    """

    TRACE = 5       # Most verbose, detailed tracing
    DEBUG = 10      # Debug information
    INFO = 20       # Informational messages
    WARN = 30       # Warning messages
    ERROR = 40      # Error messages
    CRITICAL = 50   # Critical errors
    OFF = 100       # Logging disabled

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @property
    def label(self) -> str:
        """Lowercase name used when rendering records."""
        return self.name.lower()

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive, "warning" accepted)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        name = level_str.strip().upper()
        name = LEVEL_ALIASES.get(name, name)
        if name in cls.__members__:
            return cls[name]
        raise ValueError(f"Invalid log level: {level_str}")

    @classmethod
    def coerce(cls, value: Union["LogLevel", str, int]) -> "LogLevel":
        """Accept a LogLevel, a level name or a numeric value."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls(value)

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this level.

        Returns:
            ANSI escape sequence
        """
        colors = {
            LogLevel.TRACE: "\033[37m",     # White
            LogLevel.DEBUG: "\033[36m",     # Cyan
            LogLevel.INFO: "\033[32m",      # Green
            LogLevel.WARN: "\033[33m",      # Yellow
            LogLevel.ERROR: "\033[31m",     # Red
            LogLevel.CRITICAL: "\033[35m",  # Magenta
        }
        return colors.get(self, RESET_CODE)

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return RESET_CODE


RESET_CODE = "\033[0m"
MAGENTA_CODE = "\033[35m"

LEVEL_ALIASES: Dict[str, str] = {
    "WARNING": "WARN",
    "FATAL": "CRITICAL",
}
