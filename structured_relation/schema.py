"""
Relation schema registry loaded from a column configuration document.

The document mirrors the CMS's table configuration arrays:

    {
      "pages": {
        "columns": {
          "categories": {
            "config": {
              "type": "select",
              "foreign_table": "sys_category",
              "MM": "sys_category_record_mm",
              "MM_opposite_field": "items",
              "MM_match_fields": {"tablenames": "pages", "fieldname": "categories"}
            }
          },
          "author": {"config": {"type": "group", "allowed": "be_users", "maxitems": 1}}
        }
      }
    }

Each relation column is turned into a JoinTableRelation or a DirectRelation
once, at load time.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from structured_relation.domain.models import (
    DirectRelation,
    JoinTableRelation,
    RelationConfig,
)
from structured_relation.exceptions import ConfigurationError
from structured_relation.utils.logging import get_logger

log = get_logger(__name__)

RELATION_TYPES = frozenset(["select", "group", "inline", "category"])


class ColumnConfig(BaseModel):
    """The `config` part of one column definition."""

    type: str
    foreign_table: Optional[str] = None
    allowed: Optional[str] = None
    foreign_field: Optional[str] = None
    MM: Optional[str] = None
    MM_sortby: Optional[str] = None
    MM_opposite_field: Optional[str] = None
    MM_match_fields: Dict[str, Any] = Field(default_factory=dict)
    maxitems: Optional[int] = None

    model_config = {"extra": "ignore"}

    def target_table(self) -> Optional[str]:
        if self.foreign_table:
            return self.foreign_table
        if self.allowed:
            # group fields may allow several tables; the first one is resolved
            first = self.allowed.split(",")[0].strip()
            return first if first and first != "*" else None
        return None


def build_relation(table: str, field: str, config: ColumnConfig) -> Optional[RelationConfig]:
    """Turn one column config into a relation variant, or None if it is not a relation."""
    if config.type not in RELATION_TYPES:
        return None
    foreign_table = config.target_table()
    if foreign_table is None:
        return None
    if config.foreign_field and not config.MM:
        log.warning(
            "Skipping inline relation stored on the child table",
            extra={"table": table, "field": field},
        )
        return None

    multiple = config.maxitems is None or config.maxitems > 1
    mm = (config.MM or "").strip()
    if mm:
        local_column, foreign_column = "uid_local", "uid_foreign"
        if config.MM_opposite_field:
            local_column, foreign_column = foreign_column, local_column
        return JoinTableRelation(
            source_table=table,
            source_field=field,
            foreign_table=foreign_table,
            multiple=multiple,
            join_table=mm,
            sort_field=config.MM_sortby,
            local_column=local_column,
            foreign_column=foreign_column,
            match_fields=config.MM_match_fields,
        )
    return DirectRelation(
        source_table=table,
        source_field=field,
        foreign_table=foreign_table,
        multiple=multiple,
    )


class SchemaRegistry:
    """
    In-memory RelationSchema built from a column configuration document.
    """

    def __init__(self, relations: Optional[Mapping[Tuple[str, str], RelationConfig]] = None) -> None:
        self._relations: Dict[Tuple[str, str], RelationConfig] = dict(relations or {})

    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> "SchemaRegistry":
        relations: Dict[Tuple[str, str], RelationConfig] = {}
        for table, table_config in document.items():
            columns = (table_config or {}).get("columns", {})
            for field, column in columns.items():
                try:
                    config = ColumnConfig.model_validate((column or {}).get("config", {}))
                except ValidationError as exc:
                    raise ConfigurationError(
                        f"Invalid column configuration for {table}.{field}: {exc}"
                    ) from exc
                relation = build_relation(table, field, config)
                if relation is not None:
                    relations[(table, field)] = relation
        log.debug("Loaded relation schema", extra={"relations": len(relations)})
        return cls(relations)

    @classmethod
    def from_file(cls, path: Path | str) -> "SchemaRegistry":
        schema_path = Path(path)
        try:
            with schema_path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot load relation schema '{schema_path}': {exc}") from exc
        if not isinstance(document, dict):
            raise ConfigurationError(f"Relation schema '{schema_path}' must be a JSON object")
        return cls.from_dict(document)

    def has_relation_config(self, table: str, field: str) -> bool:
        return (table, field) in self._relations

    def get_relation_config(self, table: str, field: str) -> RelationConfig:
        try:
            return self._relations[(table, field)]
        except KeyError:
            raise ConfigurationError(f"No relation configured for {table}.{field}") from None


__all__ = ["ColumnConfig", "SchemaRegistry", "build_relation"]
