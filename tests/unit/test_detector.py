from __future__ import annotations

from typing import Any, Dict

import pytest

from structured_relation.detector import SerializedValueDetector, is_serialized_value
from structured_relation.plugin import PluginRegistry, register
from structured_relation.pipeline import StructuredRelation


def _conf(content_object: Any, **options: Any) -> Dict[str, Any]:
    return {"categories": content_object, "categories.": options}


@pytest.mark.parametrize("flag", ["1", 1, True, "true"])
def test_multi_value_structured_relation_is_serialized(flag: Any) -> None:
    assert is_serialized_value(_conf("SOLR_STRUCTURED_RELATION", multiValue=flag), "categories")


@pytest.mark.parametrize(
    "configuration",
    [
        _conf("SOLR_STRUCTURED_RELATION", multiValue="0"),
        _conf("SOLR_STRUCTURED_RELATION", multiValue=""),
        _conf("SOLR_STRUCTURED_RELATION", multiValue=False),
        _conf("SOLR_STRUCTURED_RELATION"),
        _conf("SOLR_RELATION", multiValue="1"),
        _conf("TEXT", multiValue="1"),
        {"categories": "SOLR_STRUCTURED_RELATION"},
        {"other": "SOLR_STRUCTURED_RELATION", "other.": {"multiValue": "1"}},
        {},
    ],
)
def test_other_configurations_are_not_serialized(configuration: Dict[str, Any]) -> None:
    assert not is_serialized_value(configuration, "categories")


def test_detector_object_delegates_to_predicate() -> None:
    detector = SerializedValueDetector()
    configuration = _conf("SOLR_STRUCTURED_RELATION", multiValue="1")

    assert detector.is_serialized_value(configuration, "categories")
    assert detector(configuration, "categories")
    assert not detector.is_serialized_value(configuration, "title")


def test_register_adds_content_object_and_detector_once() -> None:
    registry = PluginRegistry()

    register(registry)
    register(registry)

    assert registry.content_objects == {"SOLR_STRUCTURED_RELATION": StructuredRelation}
    assert registry.serialized_value_detectors == [is_serialized_value]


def test_registry_consults_registered_detectors() -> None:
    registry = register(PluginRegistry())

    assert registry.is_serialized_value(_conf("SOLR_STRUCTURED_RELATION", multiValue="1"), "categories")
    assert not registry.is_serialized_value(_conf("SOLR_STRUCTURED_RELATION"), "categories")
