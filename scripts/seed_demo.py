"""
Demo data script for the structured relation plugin.

Creates a small CMS-like schema in Postgres (pages, categories through a join
table, authors through an identifier list, a translated category) and writes
the matching relation schema document, so `structured-relation render` can be
tried end to end.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

import psycopg
import typer

from structured_relation.infrastructure.db_factory import build_dsn

app = typer.Typer(help="Create demo tables and a relation schema document.")

DEMO_SCHEMA: Dict[str, Any] = {
    "pages": {
        "columns": {
            "categories": {
                "config": {
                    "type": "select",
                    "foreign_table": "sys_category",
                    "MM": "sys_category_record_mm",
                    "MM_opposite_field": "items",
                    "MM_match_fields": {"tablenames": "pages", "fieldname": "categories"},
                }
            },
            "authors": {"config": {"type": "group", "allowed": "be_users"}},
            "main_author": {"config": {"type": "group", "allowed": "be_users", "maxitems": 1}},
            "title": {"config": {"type": "input"}},
        }
    }
}

_DDL = """
DROP TABLE IF EXISTS pages, sys_category, sys_category_record_mm, be_users;
CREATE TABLE pages (
    uid INTEGER PRIMARY KEY,
    pid INTEGER NOT NULL DEFAULT 0,
    sys_language_uid INTEGER NOT NULL DEFAULT 0,
    l10n_parent INTEGER NOT NULL DEFAULT 0,
    title TEXT NOT NULL,
    categories INTEGER NOT NULL DEFAULT 0,
    authors TEXT NOT NULL DEFAULT '',
    main_author TEXT NOT NULL DEFAULT ''
);
CREATE TABLE sys_category (
    uid INTEGER PRIMARY KEY,
    pid INTEGER NOT NULL DEFAULT 0,
    tstamp INTEGER NOT NULL DEFAULT 0,
    hidden SMALLINT NOT NULL DEFAULT 0,
    deleted SMALLINT NOT NULL DEFAULT 0,
    sys_language_uid INTEGER NOT NULL DEFAULT 0,
    l10n_parent INTEGER NOT NULL DEFAULT 0,
    title TEXT NOT NULL,
    description TEXT
);
CREATE TABLE sys_category_record_mm (
    uid_local INTEGER NOT NULL,
    uid_foreign INTEGER NOT NULL,
    tablenames TEXT NOT NULL,
    fieldname TEXT NOT NULL,
    sorting INTEGER NOT NULL DEFAULT 0,
    sorting_foreign INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE be_users (
    uid INTEGER PRIMARY KEY,
    pid INTEGER NOT NULL DEFAULT 0,
    username TEXT NOT NULL,
    realname TEXT
);
"""

_ROWS = """
INSERT INTO pages (uid, title, categories, authors, main_author) VALUES
    (1, 'Home', 3, '3,1', 'be_users_2'),
    (2, 'Empty', 0, '', '');
INSERT INTO sys_category (uid, title, description, hidden, sys_language_uid, l10n_parent) VALUES
    (10, 'News', 'Latest news', 0, 0, 0),
    (11, 'Events', NULL, 0, 0, 0),
    (12, 'Archive', 'Old things', 1, 0, 0),
    (20, 'Actualites', 'Dernieres nouvelles', 0, 1, 10);
INSERT INTO sys_category_record_mm (uid_local, uid_foreign, tablenames, fieldname, sorting_foreign) VALUES
    (11, 1, 'pages', 'categories', 1),
    (10, 1, 'pages', 'categories', 2),
    (12, 1, 'pages', 'categories', 3);
INSERT INTO be_users (uid, username, realname) VALUES
    (1, 'alice', 'Alice'),
    (2, 'bob', NULL),
    (3, 'carol', 'Carol');
"""


def _create_demo_tables(conn: psycopg.Connection) -> None:
    with conn.cursor() as cur:
        cur.execute(_DDL)
        cur.execute(_ROWS)
    conn.commit()


def _write_schema(path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(DEMO_SCHEMA, f, indent=2, sort_keys=True)


@app.command()
def main(
    schema_path: Path = typer.Option(
        Path("relation_schema.json"), "--schema-path", help="Where to write the schema document."
    ),
    dsn: str | None = typer.Option(None, "--dsn", help="Override DSN (defaults to settings)."),
) -> None:
    """
    Create the demo tables and write the relation schema document.
    """
    with psycopg.connect(dsn or build_dsn()) as conn:
        _create_demo_tables(conn)
    _write_schema(schema_path)
    typer.echo(f"Demo tables created. Schema written to {schema_path}.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
