"""
Collaborator contracts consumed by the resolver and the pipeline.

The host CMS owns relation metadata, relation storage and translations. The
plugin only talks to it through these protocols; the PostgreSQL reference
implementations live in `structured_relation.infrastructure` and tests use
in-memory fakes.
"""

from __future__ import annotations

import abc
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from structured_relation.domain.models import Record, RelationConfig


@runtime_checkable
class RelationSchema(Protocol):
    """Relation metadata of table columns."""

    def has_relation_config(self, table: str, field: str) -> bool:
        ...

    def get_relation_config(self, table: str, field: str) -> RelationConfig:
        ...


@runtime_checkable
class RecordStore(Protocol):
    """
    Read-only access to relation storage and records.

    Implementations raise StoreError for any failure of the underlying store.
    """

    def resolve_foreign_identifiers(
        self,
        relation: RelationConfig,
        record_uid: int,
        sort_field: Optional[str] = None,
    ) -> List[int]:
        """
        Return the ordered foreign identifiers of a join table relation.

        Parameters
        ----------
        relation : RelationConfig
            The relation to resolve.
        record_uid : int
            Uid of the local record.
        sort_field : str | None
            Join table column to order by; natural order when None.
        """
        ...

    def fetch_records(
        self,
        table: str,
        identifiers: Sequence[int],
        extra_filter: Optional[str] = None,
    ) -> List[Record]:
        """Fetch rows by uid in one query. Row order is not guaranteed."""
        ...


@runtime_checkable
class OverlayService(Protocol):
    """Locale variants of records."""

    def get_active_locale_id(self) -> int:
        ...

    def get_overlay(self, table: str, record: Record) -> Record:
        ...

    def get_uid_of_overlay(self, table: str, field: str, uid: int) -> int:
        ...


class AbstractOverlayService(abc.ABC):
    """
    Optional ABC helper for class-based overlay services.

    Subclasses implement `get_overlay`; the locale id is fixed per instance.
    """

    def __init__(self, locale_id: int = 0) -> None:
        self.locale_id = locale_id

    def get_active_locale_id(self) -> int:
        return self.locale_id

    @abc.abstractmethod
    def get_overlay(self, table: str, record: Record) -> Record:  # pragma: no cover - interface only
        raise NotImplementedError

    def get_uid_of_overlay(self, table: str, field: str, uid: int) -> int:
        return uid


class DefaultLocaleOverlayService(AbstractOverlayService):
    """Overlay service for the default locale: records are returned unchanged."""

    def __init__(self) -> None:
        super().__init__(locale_id=0)

    def get_overlay(self, table: str, record: Record) -> Record:
        return record


__all__ = [
    "AbstractOverlayService",
    "DefaultLocaleOverlayService",
    "OverlayService",
    "RecordStore",
    "RelationSchema",
]
