"""
Field projection applied to related records before encoding.

Either an explicit allow-list selects the fields to keep, or the default
bookkeeping columns of the CMS are removed. The two are never combined.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from structured_relation.domain.models import Record

SYSTEM_FIELDS = frozenset(
    [
        "crdate",
        "deleted",
        "hidden",
        "l10n_diffsource",
        "l10n_parent",
        "l10n_source",
        "l10n_state",
        "pid",
        "sys_language_uid",
        "t3ver_oid",
        "t3ver_stage",
        "t3ver_state",
        "t3ver_wsid",
        "tstamp",
    ]
)


def project_record(record: Any, allow_list: Optional[Sequence[str]] = None) -> Record:
    """
    Project a single record. Field order follows the source record.

    Anything that is not a mapping is treated as an empty record.
    """
    if not isinstance(record, Mapping):
        return {}
    if allow_list:
        allowed = set(allow_list)
        return {key: value for key, value in record.items() if key in allowed}
    return {key: value for key, value in record.items() if key not in SYSTEM_FIELDS}


def project(records: Iterable[Any], allow_list: Optional[Sequence[str]] = None) -> List[Record]:
    """Project every record with the same allow-list."""
    return [project_record(record, allow_list) for record in records]


__all__ = ["SYSTEM_FIELDS", "project", "project_record"]
