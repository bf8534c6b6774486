"""
Locale overlays read from PostgreSQL.

A translated record points at its default-locale record through
`l10n_parent` and carries its locale in `sys_language_uid`. Overlaying copies
the translated values over the default record, keeping the default uid so the
relation order and identity are unchanged.
"""

from __future__ import annotations

from typing import Optional

from structured_relation.collaborators import AbstractOverlayService
from structured_relation.config import get_settings
from structured_relation.domain.models import Record
from structured_relation.infrastructure.record_store import PostgresRecordStore

# Columns of the translation that must not replace the default record's values.
_KEPT_COLUMNS = ("uid", "pid", "l10n_parent", "sys_language_uid")


class PostgresOverlayService(AbstractOverlayService):
    """Overlay service for one locale backed by a PostgresRecordStore."""

    def __init__(self, store: PostgresRecordStore, locale_id: Optional[int] = None) -> None:
        super().__init__(get_settings().locale_id if locale_id is None else locale_id)
        self.store = store

    def get_overlay(self, table: str, record: Record) -> Record:
        if self.locale_id <= 0 or "uid" not in record:
            return record
        translation = self.store.fetch_translation(table, int(record["uid"]), self.locale_id)
        if translation is None:
            return record
        overlaid = dict(record)
        overlaid.update(
            {key: value for key, value in translation.items() if key not in _KEPT_COLUMNS}
        )
        overlaid["_LOCALIZED_UID"] = translation["uid"]
        return overlaid

    def get_uid_of_overlay(self, table: str, field: str, uid: int) -> int:
        if self.locale_id <= 0:
            return uid
        translation = self.store.fetch_translation(table, uid, self.locale_id)
        return int(translation["uid"]) if translation is not None else uid


__all__ = ["PostgresOverlayService"]
