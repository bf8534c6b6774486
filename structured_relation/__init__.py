"""
Structured relation - relation fields rendered for search indexing.

When a content record is indexed, this plugin resolves a relation field into
the ordered list of related records, trims their bookkeeping columns and
encodes them into a compact, storage-safe string:

- m:n relations through join tables and direct identifier lists
- allow-list or system-field projection
- base64 JSON codec with a multi-value container
- detector telling the indexing engine which fields hold containers
- display helper decoding indexed values
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from structured_relation.codec import decode, encode, unwrap, wrap
from structured_relation.config import Settings, get_settings
from structured_relation.detector import SerializedValueDetector, is_serialized_value
from structured_relation.display import parse
from structured_relation.domain.models import (
    CONTENT_OBJECT_TYPE,
    DirectRelation,
    JoinTableRelation,
    RenderOptions,
    SourceRecord,
)
from structured_relation.exceptions import (
    CardinalityError,
    ConfigurationError,
    DecodeError,
    ResolutionError,
    StoreError,
    StructuredRelationError,
)
from structured_relation.pipeline import StructuredRelation
from structured_relation.plugin import PluginRegistry, register
from structured_relation.projector import project
from structured_relation.resolver import RelationResolver
from structured_relation.schema import SchemaRegistry
from structured_relation.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Pipeline
    "CONTENT_OBJECT_TYPE",
    "StructuredRelation",
    "RelationResolver",
    "SchemaRegistry",
    "project",
    # Models
    "DirectRelation",
    "JoinTableRelation",
    "RenderOptions",
    "SourceRecord",
    # Codec and display
    "encode",
    "decode",
    "wrap",
    "unwrap",
    "parse",
    # Host integration
    "PluginRegistry",
    "register",
    "SerializedValueDetector",
    "is_serialized_value",
    # Errors
    "StructuredRelationError",
    "CardinalityError",
    "ConfigurationError",
    "DecodeError",
    "ResolutionError",
    "StoreError",
    # Logging
    "configure_logging",
    "get_logger",
]
