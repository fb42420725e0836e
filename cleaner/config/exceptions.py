"""
catalog-cleaner - Canonical exception hierarchy.

Usage errors abort the whole run with a non-zero exit code. Per-file I/O
problems are not represented here: engines catch the ``OSError`` locally,
report it and carry on with the next file.
"""


class CleanerError(Exception):
    """Base exception catalog-cleaner."""


class UsageError(CleanerError):
    """Invalid invocation (missing catalogs, bad flag value, ...)."""


class InvalidResponseError(UsageError):
    """Operator answered an interactive prompt with an unrecognized value."""

    def __init__(self, response: str):
        self.response = response
        super().__init__(f"unrecognized response: {response!r}")


class ConfigError(CleanerError):
    """Configuration file missing, unreadable or invalid."""


class TerminalUnavailableError(CleanerError):
    """An interactive decision is required but no terminal can be read."""
