# godbot/errors.py
"""
Exceptions raised by godbot.
"""


class GodbotError(Exception):
    """Base class for godbot errors."""


class MissingCredential(GodbotError):
    """Raised when the completion backend secret is absent from the environment."""


class ConfigParseError(GodbotError, ValueError):
    """Raised when a serialized bot config cannot be parsed."""


class BackendError(GodbotError):
    """Raised when the completion backend fails to produce a completion."""
