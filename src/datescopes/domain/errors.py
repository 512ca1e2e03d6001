"""Exception hierarchy for datescopes.

Every error raised by the library derives from :class:`DateScopesError`.
Failures of the underlying clock or calendar propagate unchanged.
"""

from __future__ import annotations


class DateScopesError(Exception):
    """Base class for all datescopes errors."""


class InvalidArgumentError(DateScopesError, ValueError):
    """A caller-supplied argument is out of range or unknown.

    Raised for non-positive counts, empty or unknown field names,
    unknown scope names, and inverted intervals.
    """


class ConfigError(DateScopesError):
    """A configuration file could not be read or parsed."""
