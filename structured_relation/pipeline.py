"""
The SOLR_STRUCTURED_RELATION content object.

Resolves the relation configured on a record's field, projects the related
records and encodes them into the single string the indexing engine stores:
an empty string, one encoded record, or a multi-value container.

Usage:
    pipeline = StructuredRelation(schema, store, overlay_factory=lambda: overlays)
    value = pipeline.render(
        SourceRecord(table="pages", uid=12, data=row),
        RenderOptions(localField="categories", multiValue=True),
    )
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Callable, List, Mapping, Optional, Union

from structured_relation import codec
from structured_relation.collaborators import (
    DefaultLocaleOverlayService,
    OverlayService,
    RecordStore,
    RelationSchema,
)
from structured_relation.domain.models import Record, RenderOptions, SourceRecord
from structured_relation.exceptions import CardinalityError
from structured_relation.projector import project
from structured_relation.resolver import RelationResolver
from structured_relation.utils.logging import get_logger

log = get_logger(__name__)

OverlayFactory = Callable[[], OverlayService]


class StructuredRelation:
    """
    Render relation fields of records for indexing.

    Parameters
    ----------
    schema : RelationSchema
        Relation metadata lookup.
    store : RecordStore
        Read access to join tables and related records.
    overlay_factory : callable | None
        Creates the overlay service on first use; the instance is reused for
        the lifetime of this pipeline. Defaults to the default locale.
    strict : bool
        Whether identifiers without a record raise ResolutionError, unless a
        render overrides it with the `strict` option.
    """

    def __init__(
        self,
        schema: RelationSchema,
        store: RecordStore,
        overlay_factory: Optional[OverlayFactory] = None,
        strict: bool = True,
    ) -> None:
        self.schema = schema
        self.store = store
        self._overlay_factory = overlay_factory or DefaultLocaleOverlayService
        self.strict = strict

    @cached_property
    def overlay_service(self) -> OverlayService:
        return self._overlay_factory()

    @cached_property
    def resolver(self) -> RelationResolver:
        return RelationResolver(self.store, self.overlay_service, strict=self.strict)

    def render(
        self, source: SourceRecord, options: Union[RenderOptions, Mapping[str, Any]]
    ) -> str:
        """
        Render the configured relation field of `source`.

        Raises
        ------
        CardinalityError
            If a single value field resolves to more than one record.
        ResolutionError, StoreError
            Propagated from the resolver and the store.
        """
        if not isinstance(options, RenderOptions):
            options = RenderOptions.from_config(options)

        # No relation metadata: nothing to index, not even an empty container.
        if not self.schema.has_relation_config(source.table, options.local_field):
            log.debug(
                "No relation configuration",
                extra={"table": source.table, "field": options.local_field},
            )
            return ""

        records = project(self.get_related_items(source, options), options.fields)

        if not options.multi_value:
            if len(records) > 1:
                raise CardinalityError(
                    "Cannot glue multiple items in one single value. "
                    "Consider using a multivalue field"
                )
            if not records:
                return ""
            return codec.encode(records[0])

        return codec.wrap(codec.encode(record) for record in records)

    def render_content_object(
        self, current_record: str, data: Mapping[str, Any], conf: Mapping[str, Any]
    ) -> str:
        """Entry point matching the host's content object call: ``"table:uid"``, row, conf."""
        return self.render(SourceRecord.from_current_record(current_record, data), conf)

    def get_related_items(self, source: SourceRecord, options: RenderOptions) -> List[Record]:
        """Related records of the configured field, or [] without relation metadata."""
        field = options.local_field
        if not self.schema.has_relation_config(source.table, field):
            log.debug(
                "No relation configuration",
                extra={"table": source.table, "field": field},
            )
            return []

        relation = self.schema.get_relation_config(source.table, field)
        records = self.resolver.resolve(
            source,
            relation,
            sort_field=options.relation_table_sorting_field,
            extra_filter=options.additional_where_clause,
            strict=options.strict,
        )
        log.debug(
            "Resolved related records",
            extra={
                "table": source.table,
                "uid": source.uid,
                "field": field,
                "relation": relation.kind,
                "records": len(records),
            },
        )
        return records


__all__ = ["StructuredRelation"]
