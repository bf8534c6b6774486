"""
PostgreSQL implementation of the RecordStore collaborator.

Table and column names are composed with `psycopg.sql` identifiers; the
additional where clause of a render is an opaque fragment appended as-is.
Any psycopg error is wrapped in StoreError.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Sequence

import psycopg
from psycopg import Connection, sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from structured_relation.domain.models import JoinTableRelation, Record, RelationConfig
from structured_relation.exceptions import StoreError
from structured_relation.infrastructure.db_factory import get_sync_connection
from structured_relation.utils.logging import get_logger

log = get_logger(__name__)


class PostgresRecordStore:
    """
    Read-only record access over a connection pool or dedicated connections.

    Parameters
    ----------
    pool : ConnectionPool | None
        Pool to borrow connections from. Without a pool, each call opens and
        closes a dedicated connection.
    dsn_override : str | None
        Connection string for dedicated connections (tests, scripts).
    key_column : str
        Identifier column of every table.
    """

    def __init__(
        self,
        pool: Optional[ConnectionPool] = None,
        dsn_override: Optional[str] = None,
        key_column: str = "uid",
    ) -> None:
        self._pool = pool
        self._dsn_override = dsn_override
        self.key_column = key_column

    @contextmanager
    def _connection(self) -> Generator[Connection, None, None]:
        if self._pool is not None:
            with self._pool.connection() as conn:
                yield conn
            return
        conn = get_sync_connection(self._dsn_override)
        try:
            yield conn
        finally:
            conn.close()

    def _fetch_all(self, query: sql.Composable, params: Sequence[Any]) -> List[Record]:
        try:
            with self._connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    return list(cur.fetchall())
        except psycopg.Error as exc:
            raise StoreError(f"Query failed: {exc}") from exc

    def resolve_foreign_identifiers(
        self,
        relation: RelationConfig,
        record_uid: int,
        sort_field: Optional[str] = None,
    ) -> List[int]:
        if not isinstance(relation, JoinTableRelation):
            raise TypeError("Only join table relations are resolved by the store")

        query = sql.SQL("SELECT {foreign} AS uid FROM {table} WHERE {local} = %s").format(
            foreign=sql.Identifier(relation.foreign_column),
            table=sql.Identifier(relation.join_table),
            local=sql.Identifier(relation.local_column),
        )
        params: List[Any] = [record_uid]
        for column, value in sorted(relation.match_fields.items()):
            query += sql.SQL(" AND {} = %s").format(sql.Identifier(column))
            params.append(value)
        if sort_field:
            query += sql.SQL(" ORDER BY {}").format(sql.Identifier(sort_field))

        rows = self._fetch_all(query, params)
        return [int(row["uid"]) for row in rows]

    def fetch_records(
        self,
        table: str,
        identifiers: Sequence[int],
        extra_filter: Optional[str] = None,
    ) -> List[Record]:
        if not identifiers:
            return []
        query = sql.SQL("SELECT * FROM {table} WHERE {key} = ANY(%s)").format(
            table=sql.Identifier(table),
            key=sql.Identifier(self.key_column),
        )
        if extra_filter:
            query += sql.SQL(" AND ({})").format(sql.SQL(extra_filter))

        rows = self._fetch_all(query, [list(identifiers)])
        log.debug("Fetched records", extra={"table": table, "requested": len(identifiers), "rows": len(rows)})
        return rows

    def fetch_record(self, table: str, uid: int) -> Optional[Record]:
        """Fetch one row by uid, None if it does not exist."""
        rows = self.fetch_records(table, [uid])
        return rows[0] if rows else None

    def fetch_translation(
        self,
        table: str,
        parent_uid: int,
        locale_id: int,
        language_field: str = "sys_language_uid",
        parent_field: str = "l10n_parent",
    ) -> Optional[Record]:
        """Fetch the locale variant of a record, None if it is not translated."""
        query = sql.SQL("SELECT * FROM {table} WHERE {parent} = %s AND {language} = %s LIMIT 1").format(
            table=sql.Identifier(table),
            parent=sql.Identifier(parent_field),
            language=sql.Identifier(language_field),
        )
        rows = self._fetch_all(query, [parent_uid, locale_id])
        return rows[0] if rows else None


__all__ = ["PostgresRecordStore"]
