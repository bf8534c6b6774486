from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from structured_relation import codec
from structured_relation.main import app

runner = CliRunner()


def test_decode_single_value() -> None:
    result = runner.invoke(app, ["decode", codec.encode({"uid": 1, "title": "News"})])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"uid": 1, "title": "News"}


def test_decode_multi_value_container() -> None:
    container = codec.wrap([codec.encode({"uid": 2}), codec.encode({"uid": 1})])

    result = runner.invoke(app, ["decode", "--multi-value", container])

    assert result.exit_code == 0
    assert json.loads(result.output) == [{"uid": 2}, {"uid": 1}]


def test_info_shows_locale_and_schema(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOCALE_ID", "1")
    monkeypatch.setenv("SCHEMA_PATH", "relations.json")

    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "schema=relations.json locale=1" in result.output
