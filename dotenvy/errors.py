"""Exceptions raised while finding, reading and parsing env files."""

from __future__ import annotations

import errno


class Error(Exception):
    """Base class of every error this package raises."""

    def not_found(self) -> bool:
        """Return True if the error means that a file was not found."""
        return False


class LineParseError(Error):
    """A line of an env file could not be parsed."""

    def __init__(self, line: str, index: int) -> None:
        super().__init__(
            f"Error parsing line: '{line}', error at line index: {index}"
        )
        self.line = line
        self.index = index


class IoError(Error):
    """An operating-system error occurred while finding or reading a file."""

    def __init__(self, error: OSError) -> None:
        super().__init__(str(error))
        self.error = error
        self.__cause__ = error

    def __str__(self) -> str:
        return str(self.error)

    def not_found(self) -> bool:
        return (
            isinstance(self.error, FileNotFoundError)
            or getattr(self.error, "errno", None) == errno.ENOENT
        )


class EnvVarError(Error):
    """A requested environment variable is not set."""

    def __init__(self, key: str) -> None:
        super().__init__("environment variable not found")
        self.key = key