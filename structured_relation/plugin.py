"""
Startup registration of the plugin into the host's registry.

The host owns a `PluginRegistry`; `register` is called once at process start
and adds the SOLR_STRUCTURED_RELATION content object factory and the
serialized value detector.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping

from structured_relation.detector import is_serialized_value
from structured_relation.domain.models import CONTENT_OBJECT_TYPE
from structured_relation.pipeline import StructuredRelation
from structured_relation.utils.logging import get_logger

log = get_logger(__name__)

Detector = Callable[[Mapping[str, Any], str], bool]


@dataclass
class PluginRegistry:
    """
    Extension points consumed by the indexing engine.
    """

    content_objects: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    serialized_value_detectors: List[Detector] = field(default_factory=list)

    def add_content_object(self, name: str, factory: Callable[..., Any]) -> None:
        self.content_objects[name] = factory

    def add_serialized_value_detector(self, detector: Detector) -> None:
        if detector not in self.serialized_value_detectors:
            self.serialized_value_detectors.append(detector)

    def is_serialized_value(self, indexing_configuration: Mapping[str, Any], field_name: str) -> bool:
        """True when any registered detector recognizes the field."""
        return any(
            detector(indexing_configuration, field_name)
            for detector in self.serialized_value_detectors
        )


def register(registry: PluginRegistry) -> PluginRegistry:
    """Register the content object and the detector. Safe to call twice."""
    registry.add_content_object(CONTENT_OBJECT_TYPE, StructuredRelation)
    registry.add_serialized_value_detector(is_serialized_value)
    log.debug("Registered plugin", extra={"content_object": CONTENT_OBJECT_TYPE})
    return registry


__all__ = ["PluginRegistry", "register"]
