"""
Domain models for the structured relation plugin.

Defines the record shapes flowing through the pipeline, the relation metadata
variants resolved once from the schema document, and the render options read
from the host's indexing configuration.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from structured_relation.exceptions import ConfigurationError

# One fetched row: column name -> scalar value.
Record = Dict[str, Any]

CONTENT_OBJECT_TYPE = "SOLR_STRUCTURED_RELATION"

_TRUTHY = {"1", "true", "yes", "on"}


def is_enabled(value: Any) -> bool:
    """Interpret a configuration flag the way the host writes them ("1", 1, True)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def parse_field_list(value: Union[str, List[str], None]) -> List[str]:
    """Split a comma separated list, trimming entries and dropping empty ones."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


class SourceRecord(BaseModel):
    """
    The record currently being indexed.
    """

    table: str = Field(..., min_length=1, description="Table the record lives in.")
    uid: int = Field(..., description="Record identifier.")
    data: Dict[str, Any] = Field(default_factory=dict, description="Row values.")

    model_config = {"frozen": True}

    @classmethod
    def from_current_record(cls, current_record: str, data: Mapping[str, Any]) -> "SourceRecord":
        """Build from the host's ``"table:uid"`` notation."""
        table, sep, uid = current_record.partition(":")
        if not sep or not table:
            raise ConfigurationError(f"Invalid current record reference '{current_record}'")
        try:
            return cls(table=table, uid=int(uid), data=dict(data))
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid current record reference '{current_record}'"
            ) from exc


class _BaseRelation(BaseModel):
    source_table: str
    source_field: str
    foreign_table: str
    multiple: bool = True

    model_config = {"frozen": True}


class JoinTableRelation(_BaseRelation):
    """m:n relation mediated by a join table."""

    kind: Literal["join_table"] = "join_table"
    join_table: str
    sort_field: Optional[str] = None
    local_column: str = "uid_local"
    foreign_column: str = "uid_foreign"
    match_fields: Dict[str, Any] = Field(default_factory=dict)


class DirectRelation(_BaseRelation):
    """Relation stored as an identifier list on the source field."""

    kind: Literal["direct"] = "direct"


RelationConfig = Annotated[
    Union[JoinTableRelation, DirectRelation], Field(discriminator="kind")
]


class RenderOptions(BaseModel):
    """
    Options of one SOLR_STRUCTURED_RELATION field in the indexing configuration.
    """

    local_field: str = Field(..., alias="localField", min_length=1)
    fields: List[str] = Field(default_factory=list)
    multi_value: bool = Field(False, alias="multiValue")
    additional_where_clause: Optional[str] = Field(None, alias="additionalWhereClause")
    relation_table_sorting_field: Optional[str] = Field(
        None, alias="relationTableSortingField"
    )
    strict: Optional[bool] = None

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("fields", mode="before")
    @classmethod
    def _split_fields(cls, value: Any) -> List[str]:
        return parse_field_list(value)

    @field_validator("multi_value", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        return is_enabled(value)

    @field_validator("strict", mode="before")
    @classmethod
    def _parse_strict(cls, value: Any) -> Optional[bool]:
        if value is None or value == "":
            return None
        return is_enabled(value)

    @field_validator("additional_where_clause", "relation_table_sorting_field", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_config(cls, conf: Mapping[str, Any]) -> "RenderOptions":
        """Validate a raw configuration mapping, raising ConfigurationError."""
        try:
            return cls.model_validate(dict(conf))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid render options: {exc}") from exc


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
