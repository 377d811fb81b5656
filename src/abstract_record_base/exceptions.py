"""Exceptions raised for broken record declarations and denied access.

Invalid input data is never raised; it is collected in an OperationResult.
"""

from __future__ import annotations

__all__ = ["AttributeAccessError", "RecordConfigurationError"]


class RecordConfigurationError(RuntimeError):
    """A record class declaration is invalid.

    Raised while resolving per-class metadata (attribute list, classes,
    validators, defaults, getters, setters, generators, options).
    """


class AttributeAccessError(AttributeError):
    """Access to a record attribute is denied or the attribute is unknown."""
