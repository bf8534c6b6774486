from __future__ import annotations

from typing import Any

import pytest

from structured_relation.domain.models import RenderOptions, SourceRecord, is_enabled
from structured_relation.exceptions import ConfigurationError


def test_render_options_from_host_configuration() -> None:
    options = RenderOptions.from_config(
        {
            "localField": "categories",
            "fields": "uid, title",
            "multiValue": "1",
            "additionalWhereClause": "hidden = 0",
            "relationTableSortingField": "sorting",
            "stdWrap.": {"unrelated": "ignored"},
        }
    )

    assert options.local_field == "categories"
    assert options.fields == ["uid", "title"]
    assert options.multi_value is True
    assert options.additional_where_clause == "hidden = 0"
    assert options.relation_table_sorting_field == "sorting"
    assert options.strict is None


def test_render_options_defaults() -> None:
    options = RenderOptions.from_config({"localField": "categories", "additionalWhereClause": " "})

    assert options.fields == []
    assert options.multi_value is False
    assert options.additional_where_clause is None


def test_render_options_require_local_field() -> None:
    with pytest.raises(ConfigurationError):
        RenderOptions.from_config({"fields": "title"})


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), ("1", True), (1, True), ("true", True), ("0", False), ("", False), (None, False), (2, False)],
)
def test_is_enabled(value: Any, expected: bool) -> None:
    assert is_enabled(value) is expected


def test_source_record_from_current_record() -> None:
    source = SourceRecord.from_current_record("pages:12", {"title": "Home"})

    assert (source.table, source.uid, source.data) == ("pages", 12, {"title": "Home"})
