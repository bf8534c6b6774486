"""
Relation resolution: from a source record and a relation to ordered records.

Identifiers come either from a join table (m:n) or from the identifier list
stored on the source field. All related rows are fetched in one batched query
whose row order is arbitrary, so the identifier order is restored afterwards,
the way ``ORDER BY FIELD(uid, ...)`` would on MySQL.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from structured_relation.collaborators import OverlayService, RecordStore
from structured_relation.domain.models import (
    DirectRelation,
    JoinTableRelation,
    Record,
    RelationConfig,
    SourceRecord,
)
from structured_relation.exceptions import ResolutionError
from structured_relation.utils.logging import get_logger

log = get_logger(__name__)


def parse_identifier_list(value: Any, foreign_table: str) -> List[int]:
    """
    Parse the raw value of a direct relation field into identifiers.

    Accepts ``"3,1,2"``, a single int, a list of ints, and group-style entries
    prefixed with the table name (``"pages_3"``). Entries of other tables and
    non-positive identifiers are skipped.
    """
    if value is None or value == "":
        return []
    if isinstance(value, bool):
        return []
    if isinstance(value, int):
        return [value] if value > 0 else []
    items: Iterable[Any] = value.split(",") if isinstance(value, str) else value

    prefix = f"{foreign_table}_"
    identifiers: List[int] = []
    for item in items:
        entry = str(item).strip()
        if entry.startswith(prefix):
            entry = entry[len(prefix):]
        try:
            uid = int(entry)
        except ValueError:
            log.debug("Skipping relation entry", extra={"entry": entry, "table": foreign_table})
            continue
        if uid > 0:
            identifiers.append(uid)
    return identifiers


def sort_by_identifier_order(
    rows: Iterable[Record],
    identifiers: Sequence[int],
    key: str = "uid",
    strict: bool = True,
) -> List[Record]:
    """
    Order rows by the position of their key in `identifiers`.

    Duplicate identifiers keep their first position. A row whose key is not in
    the list is always an error; an identifier without a row is an error only
    when `strict`.
    """
    positions: Dict[int, int] = {}
    for position, uid in enumerate(identifiers):
        positions.setdefault(int(uid), position)

    placed: Dict[int, Record] = {}
    for row in rows:
        try:
            position = positions[int(row[key])]
        except (KeyError, TypeError, ValueError) as exc:
            raise ResolutionError(
                f"Fetched row {key}={row.get(key)!r} is not part of the requested "
                f"identifiers {list(identifiers)}"
            ) from exc
        placed[position] = row

    missing = [uid for uid, position in positions.items() if position not in placed]
    if missing:
        if strict:
            raise ResolutionError(f"No record found for identifiers {missing}")
        log.debug("Dropping unresolved identifiers", extra={"identifiers": missing})

    return [placed[position] for position in sorted(placed)]


class RelationResolver:
    """
    Resolve the related records of one relation field.

    Parameters
    ----------
    store : RecordStore
        Source of join table identifiers and records.
    overlay_service : OverlayService
        Locale variants; records are overlaid when the active locale id > 0.
    strict : bool
        Default for unresolved identifiers, see `sort_by_identifier_order`.
    """

    def __init__(
        self, store: RecordStore, overlay_service: OverlayService, strict: bool = True
    ) -> None:
        self.store = store
        self.overlay_service = overlay_service
        self.strict = strict

    def resolve(
        self,
        source: SourceRecord,
        relation: RelationConfig,
        sort_field: Optional[str] = None,
        extra_filter: Optional[str] = None,
        strict: Optional[bool] = None,
    ) -> List[Record]:
        """Return related records in relation order, possibly localized."""
        identifiers = self.resolve_identifiers(source, relation, sort_field)
        if not identifiers:
            return []

        rows = self.store.fetch_records(relation.foreign_table, identifiers, extra_filter)
        records = sort_by_identifier_order(
            rows, identifiers, strict=self.strict if strict is None else strict
        )

        if self.overlay_service.get_active_locale_id() > 0:
            records = [
                self.overlay_service.get_overlay(relation.foreign_table, record)
                for record in records
            ]
        return records

    def resolve_identifiers(
        self,
        source: SourceRecord,
        relation: RelationConfig,
        sort_field: Optional[str] = None,
    ) -> List[int]:
        uid = self.overlay_service.get_uid_of_overlay(
            source.table, relation.source_field, source.uid
        )
        if isinstance(relation, JoinTableRelation):
            return list(
                self.store.resolve_foreign_identifiers(
                    relation, uid, sort_field or relation.sort_field
                )
            )
        if isinstance(relation, DirectRelation):
            return parse_identifier_list(
                source.data.get(relation.source_field), relation.foreign_table
            )
        raise TypeError(f"Unsupported relation type {type(relation).__name__}")


__all__ = ["RelationResolver", "parse_identifier_list", "sort_by_identifier_order"]
