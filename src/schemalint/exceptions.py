"""Exception classes for schemalint."""

from typing import Optional

__all__ = [
    "SchemaLintError",
    "InvalidRuleConfigurationError",
    "InvalidInputError",
    "SchemaLoadError",
    "ConfigError",
]


class SchemaLintError(Exception):
    """Base exception for schemalint."""


class InvalidRuleConfigurationError(SchemaLintError, ValueError):
    """A rule was constructed with an invalid level or limit."""


class InvalidInputError(SchemaLintError, TypeError):
    """A required argument was missing or of the wrong kind."""

    def __init__(self, argument: str, message: Optional[str] = None):
        self.argument = argument
        super().__init__(message or f"'{argument}' must not be None")


class SchemaLoadError(SchemaLintError):
    """Error loading a schema snapshot."""


class ConfigError(SchemaLintError):
    """Error in configuration."""
