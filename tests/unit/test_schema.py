from __future__ import annotations

import json
from pathlib import Path

import pytest

from structured_relation.domain.models import DirectRelation, JoinTableRelation
from structured_relation.exceptions import ConfigurationError
from structured_relation.schema import SchemaRegistry


def test_mm_column_becomes_join_table_relation() -> None:
    registry = SchemaRegistry.from_dict(
        {
            "tx_news": {
                "columns": {
                    "tags": {
                        "config": {
                            "type": "select",
                            "foreign_table": "tx_tag",
                            "MM": "tx_news_tag_mm",
                            "MM_sortby": "sorting",
                        }
                    }
                }
            }
        }
    )

    relation = registry.get_relation_config("tx_news", "tags")

    assert isinstance(relation, JoinTableRelation)
    assert relation.kind == "join_table"
    assert relation.join_table == "tx_news_tag_mm"
    assert relation.foreign_table == "tx_tag"
    assert relation.sort_field == "sorting"
    assert (relation.local_column, relation.foreign_column) == ("uid_local", "uid_foreign")


def test_opposite_field_swaps_join_columns_and_keeps_match_fields() -> None:
    registry = SchemaRegistry.from_dict(
        {
            "pages": {
                "columns": {
                    "categories": {
                        "config": {
                            "type": "category",
                            "foreign_table": "sys_category",
                            "MM": "sys_category_record_mm",
                            "MM_opposite_field": "items",
                            "MM_match_fields": {"tablenames": "pages"},
                        }
                    }
                }
            }
        }
    )

    relation = registry.get_relation_config("pages", "categories")

    assert (relation.local_column, relation.foreign_column) == ("uid_foreign", "uid_local")
    assert relation.match_fields == {"tablenames": "pages"}


def test_group_column_becomes_direct_relation_on_first_allowed_table() -> None:
    registry = SchemaRegistry.from_dict(
        {"pages": {"columns": {"author": {"config": {"type": "group", "allowed": "be_users, fe_users", "maxitems": 1}}}}}
    )

    relation = registry.get_relation_config("pages", "author")

    assert isinstance(relation, DirectRelation)
    assert relation.foreign_table == "be_users"
    assert relation.multiple is False


@pytest.mark.parametrize(
    "config",
    [
        {"type": "input"},
        {"type": "select"},
        {"type": "group", "allowed": "*"},
        {"type": "inline", "foreign_table": "tx_child", "foreign_field": "parent"},
    ],
)
def test_non_relation_columns_have_no_relation_config(config: dict) -> None:
    registry = SchemaRegistry.from_dict({"pages": {"columns": {"field": {"config": config}}}})

    assert not registry.has_relation_config("pages", "field")


def test_unknown_relation_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        SchemaRegistry().get_relation_config("pages", "missing")


def test_invalid_column_config_raises() -> None:
    with pytest.raises(ConfigurationError, match="pages.broken"):
        SchemaRegistry.from_dict({"pages": {"columns": {"broken": {"config": {"maxitems": 1}}}}})


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text(
        json.dumps({"pages": {"columns": {"authors": {"config": {"type": "group", "allowed": "be_users"}}}}}),
        encoding="utf-8",
    )

    assert SchemaRegistry.from_file(path).has_relation_config("pages", "authors")


def test_from_file_rejects_missing_or_invalid_documents(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        SchemaRegistry.from_file(tmp_path / "missing.json")

    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="JSON object"):
        SchemaRegistry.from_file(path)
