"""Tests for the inspect command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dtoforge.cli import app, parse_options
from dtoforge.core import ir
from dtoforge.core.errors import ConfigError

runner = CliRunner()


def _write_schema(path: Path, entities: list[ir.EntitySpec]) -> Path:
    schema_file = path / "schema.json"
    schema_file.write_text(json.dumps([e.model_dump(mode="json") for e in entities]))
    return schema_file


class TestParseOptions:
    def test_pairs(self):
        assert parse_options(["classValidation=true", "dtoSuffix = Input"]) == {
            "classValidation": "true",
            "dtoSuffix": "Input",
        }

    def test_missing_separator(self):
        with pytest.raises(ConfigError, match="key=value"):
            parse_options(["classValidation"])


class TestInspect:
    def test_json_output(self, tmp_path, author, book):
        schema_file = _write_schema(tmp_path, [author, book])
        result = runner.invoke(
            app, ["inspect", str(schema_file), "--entity", "Author", "--kind", "create", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert "CreateAuthorBooksRelationInputDto" in result.output
        assert "./connect-book.dto" in result.output

    def test_table_output(self, tmp_path, post):
        schema_file = _write_schema(tmp_path, [post])
        result = runner.invoke(app, ["inspect", str(schema_file), "--kind", "update"])
        assert result.exit_code == 0, result.output
        assert "Post (update)" in result.output
        assert "title" in result.output

    def test_object_with_entities_key(self, tmp_path, post):
        schema_file = tmp_path / "schema.json"
        schema_file.write_text(json.dumps({"entities": [post.model_dump(mode="json")]}))
        result = runner.invoke(app, ["inspect", str(schema_file), "--json"])
        assert result.exit_code == 0, result.output
        assert "publishedAt" in result.output

    def test_options(self, tmp_path, post):
        schema_file = _write_schema(tmp_path, [post])
        result = runner.invoke(
            app,
            ["inspect", str(schema_file), "-k", "create", "-o", "classValidation=true", "--json"],
        )
        assert result.exit_code == 0, result.output
        assert "IsNotEmpty" in result.output

    def test_unknown_entity(self, tmp_path, post):
        schema_file = _write_schema(tmp_path, [post])
        result = runner.invoke(app, ["inspect", str(schema_file), "--entity", "Comment"])
        assert result.exit_code == 1
        assert "Entity not found: Comment" in result.output

    def test_invalid_option(self, tmp_path, post):
        schema_file = _write_schema(tmp_path, [post])
        result = runner.invoke(app, ["inspect", str(schema_file), "-o", "noDependencies=maybe"])
        assert result.exit_code == 1
        assert "noDependencies" in result.output

    def test_relation_resolution_failure(self, tmp_path, author):
        schema_file = _write_schema(tmp_path, [author])
        result = runner.invoke(app, ["inspect", str(schema_file)])
        assert result.exit_code == 1
        assert "related model 'Book' not found" in result.output

    def test_invalid_json(self, tmp_path):
        schema_file = tmp_path / "schema.json"
        schema_file.write_text("{not json")
        result = runner.invoke(app, ["inspect", str(schema_file)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_entity_descriptor(self, tmp_path):
        schema_file = tmp_path / "schema.json"
        schema_file.write_text(json.dumps([{"fields": []}]))
        result = runner.invoke(app, ["inspect", str(schema_file)])
        assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("dtoforge ")
