"""
Infrastructure package for the structured relation plugin.

Centralizes database connectivity and the PostgreSQL implementations of the
record store and overlay collaborators. Keep this layer focused on I/O and
resource management, decoupled from resolver/pipeline logic.
"""

from structured_relation.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_sync_connection,
    get_sync_pool,
)
from structured_relation.infrastructure.overlay import PostgresOverlayService
from structured_relation.infrastructure.record_store import PostgresRecordStore

__all__ = [
    "PoolManager",
    "PostgresOverlayService",
    "PostgresRecordStore",
    "build_dsn",
    "get_sync_connection",
    "get_sync_pool",
]
