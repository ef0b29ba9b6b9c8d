"""
Engine error taxonomy.

The API layer maps these onto HTTP status codes; the CLI maps them onto exit codes.
"""

from __future__ import annotations


class EventRankError(Exception):
    """Base exception for ranking engine errors."""


class InvalidArgumentError(EventRankError, ValueError):
    """Raised for caller-supplied identifiers or pagination values that cannot be used."""


class NotFoundError(EventRankError):
    """Raised by a store when no rows exist for the requested key."""


class DependencyUnavailableError(EventRankError):
    """Raised when the Preference Store or Event Catalog cannot be read."""
