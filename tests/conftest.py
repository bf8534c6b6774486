"""
Pytest configuration for the structured relation plugin.

Provides fixtures for:
- Settings override for integration tests
- Database connection management
- Demo tables and the matching relation schema document
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import psycopg
import pytest

from structured_relation.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Let tests change environment variables between get_settings() calls."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "cms"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def demo_tables(db_connection: psycopg.Connection) -> Generator[None, None, None]:
    """
    Create the demo tables before each test function and drop them afterwards.
    """
    from scripts.seed_demo import _create_demo_tables

    _create_demo_tables(db_connection)
    yield
    with db_connection.cursor() as cur:
        cur.execute("DROP TABLE IF EXISTS pages, sys_category, sys_category_record_mm, be_users;")
    db_connection.commit()


@pytest.fixture(scope="function")
def demo_schema_path(tmp_path: Path) -> Path:
    """
    Write the demo relation schema document and return its path.
    """
    from scripts.seed_demo import _write_schema

    path = tmp_path / "relation_schema.json"
    _write_schema(path)
    return path
