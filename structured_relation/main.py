from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from structured_relation.config import get_settings
from structured_relation.display import parse
from structured_relation.domain.models import RenderOptions, SourceRecord
from structured_relation.exceptions import ConfigurationError, StructuredRelationError
from structured_relation.infrastructure.db_factory import get_sync_pool
from structured_relation.infrastructure.overlay import PostgresOverlayService
from structured_relation.infrastructure.record_store import PostgresRecordStore
from structured_relation.pipeline import StructuredRelation
from structured_relation.schema import SchemaRegistry
from structured_relation.utils.logging import configure_logging

app = typer.Typer(help="Structured relation rendering for search indexing.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"schema={settings.schema_path or '-'} locale={settings.locale_id} "
        f"strict={settings.strict_resolution}"
    )


@app.command()
def render(
    record: str = typer.Argument(..., help="Record to render, as table:uid."),
    field: str = typer.Option(..., "--field", "-f", help="Relation field (localField)."),
    fields: Optional[str] = typer.Option(
        None, "--fields", help="Comma separated fields to keep on related records."
    ),
    multi_value: bool = typer.Option(False, "--multi-value", "-m", help="Render a multi-value container."),
    where: Optional[str] = typer.Option(
        None, "--where", help="Additional where clause applied to related records."
    ),
    sort_field: Optional[str] = typer.Option(
        None, "--sort-field", help="Join table column to sort relations by."
    ),
) -> None:
    """
    Render one relation field of a stored record and print the indexed value.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    if not settings.schema_path:
        raise ConfigurationError("SCHEMA_PATH must point to the relation schema document")

    store = PostgresRecordStore(pool=get_sync_pool())
    pipeline = StructuredRelation(
        SchemaRegistry.from_file(settings.schema_path),
        store,
        overlay_factory=lambda: PostgresOverlayService(store, settings.locale_id),
        strict=settings.strict_resolution,
    )

    reference = SourceRecord.from_current_record(record, {})
    data = store.fetch_record(reference.table, reference.uid)
    if data is None:
        typer.echo(f"Record {record} not found.", err=True)
        raise typer.Exit(code=1)

    options = RenderOptions(
        local_field=field,
        fields=fields,
        multi_value=multi_value,
        additional_where_clause=where,
        relation_table_sorting_field=sort_field,
    )
    typer.echo(pipeline.render(reference.model_copy(update={"data": data}), options))


@app.command()
def decode(
    value: str = typer.Argument(..., help="Indexed value or multi-value container."),
    multi_value: bool = typer.Option(False, "--multi-value", "-m", help="Value is a container."),
) -> None:
    """
    Decode an indexed value and print the related records as JSON.
    """
    typer.echo(json.dumps(parse(value, multi_value=multi_value), indent=2, ensure_ascii=False))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except StructuredRelationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
