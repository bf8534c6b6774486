"""
Domain package for the structured relation plugin.

Exports the records, relation variants and render options used across the
resolver, the pipeline and the schema registry. Keep this package focused on
data definitions and validation concerns.
"""

from structured_relation.domain.models import (
    CONTENT_OBJECT_TYPE,
    DirectRelation,
    JoinTableRelation,
    Record,
    RelationConfig,
    RenderOptions,
    SourceRecord,
    is_enabled,
    parse_field_list,
)

__all__ = [
    "CONTENT_OBJECT_TYPE",
    "DirectRelation",
    "JoinTableRelation",
    "Record",
    "RelationConfig",
    "RenderOptions",
    "SourceRecord",
    "is_enabled",
    "parse_field_list",
]
