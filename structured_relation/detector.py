"""
Serialized value detection for the indexing engine.

Multi-value SOLR_STRUCTURED_RELATION fields render a container string; the
indexing engine asks its registered detectors whether a field holds such a
container so it splits it instead of indexing it as flat text.
"""

from __future__ import annotations

from typing import Any, Mapping

from structured_relation.domain.models import CONTENT_OBJECT_TYPE, is_enabled


def is_serialized_value(indexing_configuration: Mapping[str, Any], field_name: str) -> bool:
    if indexing_configuration.get(field_name) != CONTENT_OBJECT_TYPE:
        return False
    options = indexing_configuration.get(f"{field_name}.")
    if not isinstance(options, Mapping):
        return False
    return is_enabled(options.get("multiValue"))


class SerializedValueDetector:
    """Object form of `is_serialized_value` for hosts registering detector instances."""

    def is_serialized_value(
        self, indexing_configuration: Mapping[str, Any], field_name: str
    ) -> bool:
        return is_serialized_value(indexing_configuration, field_name)

    def __call__(self, indexing_configuration: Mapping[str, Any], field_name: str) -> bool:
        return is_serialized_value(indexing_configuration, field_name)


__all__ = ["SerializedValueDetector", "is_serialized_value"]
