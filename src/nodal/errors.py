"""Exception hierarchy for puzzle loading and configuration."""

from __future__ import annotations


class NodalError(ValueError):
    """Base class for recoverable input errors raised by nodal."""


class PuzzleDefinitionError(NodalError):
    """Raised when a puzzle definition is malformed."""


class SolutionFormatError(NodalError):
    """Raised when a solution file or record cannot be parsed."""


class ConfigError(NodalError):
    """Raised when ``config.yml`` contains invalid settings."""
