"""
Scripture QA Service - Custom Exceptions

All exception classes end with "Error" and derive from ScriptureQAError,
so callers can catch the whole family without shadowing builtins.
"""

from __future__ import annotations


class ScriptureQAError(Exception):
    """Base exception for Scripture QA Service.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """
        Initialize the error with a message.

        Args:
            message: Human-readable description of the error.
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class DataUnavailableError(ScriptureQAError):
    """Raised when a dataset cannot be fetched or parsed at load time.

    This exception is raised in scenarios such as:
    - Non-2xx response from the dataset URL
    - Missing dataset file
    - Empty payload or missing header columns

    Attributes:
        source: The dataset source that failed, when known.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class NotReadyError(ScriptureQAError):
    """Raised when a query arrives before the record collections are loaded."""


class QueryFailedError(ScriptureQAError):
    """Raised when interpretation or scoring fails unexpectedly.

    Query processing has no side effects, so callers may retry.
    """


class ConfigurationError(ScriptureQAError):
    """Raised when configuration (e.g. the vocabulary file) is invalid or missing."""
