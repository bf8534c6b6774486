"""
Exception hierarchy for the structured relation plugin.

Every error raised by the plugin derives from StructuredRelationError so the
indexing engine can catch a single type per field rendering. A failure always
aborts the whole field value; no partial encoding is ever returned.
"""

from __future__ import annotations


class StructuredRelationError(Exception):
    """Base class for all plugin errors."""


class ConfigurationError(StructuredRelationError):
    """Invalid render options or relation schema document."""


class CardinalityError(StructuredRelationError):
    """More than one related record resolved for a single value field."""


class ResolutionError(StructuredRelationError):
    """Fetched rows do not match the resolved identifier list."""


class DecodeError(StructuredRelationError, ValueError):
    """A value was not produced by the codec and cannot be decoded."""


class StoreError(StructuredRelationError):
    """The underlying data store failed; the original error is chained."""


__all__ = [
    "StructuredRelationError",
    "ConfigurationError",
    "CardinalityError",
    "ResolutionError",
    "DecodeError",
    "StoreError",
]
