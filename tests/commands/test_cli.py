"""Tests for commands/cli.py: ``envguard check`` and ``envguard show``."""

import json
import os
import sys
import textwrap

import pytest
from click.testing import CliRunner

from envguard.commands.cli import import_schema, main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def schema_module(tmp_path, monkeypatch):
    """Write an importable schema module and return its name."""
    monkeypatch.syspath_prepend(str(tmp_path))

    def _make(name: str, body: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(body))
        return name

    return _make


SCHEMA_BODY = """
from typing import Annotated

from pydantic import Field

from envguard.env import FieldRule

SCHEMA = {
    "ENVGUARD_CLI_PORT": FieldRule.number(required=True),
    "ENVGUARD_CLI_IDS": FieldRule.array(items=Annotated[int, Field(ge=20)]),
}
NOT_A_SCHEMA = 42
"""


class TestImportSchema:
    def test_valid_reference(self, schema_module):
        name = schema_module("cli_schema_import", SCHEMA_BODY)
        assert "ENVGUARD_CLI_PORT" in import_schema(f"{name}:SCHEMA")

    @pytest.mark.parametrize("reference", ["no_colon", ":SCHEMA", "module:"])
    def test_malformed_reference(self, reference):
        with pytest.raises(ValueError, match="module:attribute"):
            import_schema(reference)

    def test_module_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "path", [entry for entry in sys.path if entry not in ("", str(tmp_path))])
        monkeypatch.chdir(tmp_path)
        (tmp_path / "cli_schema_cwd.py").write_text(textwrap.dedent(SCHEMA_BODY))

        assert "ENVGUARD_CLI_PORT" in import_schema("cli_schema_cwd:SCHEMA")
        assert sys.path[0] == os.getcwd()

    def test_not_a_mapping(self, schema_module):
        name = schema_module("cli_schema_not_mapping", SCHEMA_BODY)
        with pytest.raises(ValueError, match="not a schema mapping"):
            import_schema(f"{name}:NOT_A_SCHEMA")


class TestCheck:
    def test_valid_environment(self, runner, schema_module, monkeypatch):
        name = schema_module("cli_schema_ok", SCHEMA_BODY)
        monkeypatch.setenv("ENVGUARD_CLI_PORT", "8080")
        monkeypatch.delenv("ENVGUARD_CLI_IDS", raising=False)

        result = runner.invoke(main, ["check", f"{name}:SCHEMA"])

        assert result.exit_code == 0
        assert "OK: 1 variables validated" in result.output

    def test_missing_variable(self, runner, schema_module, monkeypatch):
        name = schema_module("cli_schema_missing", SCHEMA_BODY)
        monkeypatch.delenv("ENVGUARD_CLI_PORT", raising=False)

        result = runner.invoke(main, ["check", f"{name}:SCHEMA"])

        assert result.exit_code == 1
        assert 'Required variable "ENVGUARD_CLI_PORT" is not set.' in result.output

    def test_validation_messages_listed(self, runner, schema_module, monkeypatch):
        name = schema_module("cli_schema_invalid", SCHEMA_BODY)
        monkeypatch.setenv("ENVGUARD_CLI_PORT", "8080")
        monkeypatch.setenv("ENVGUARD_CLI_IDS", "1,2")

        result = runner.invoke(main, ["check", f"{name}:SCHEMA"])

        assert result.exit_code == 1
        assert result.output.count("  - ") == 2

    def test_dotenv_fills_missing(self, runner, schema_module, monkeypatch, tmp_path):
        name = schema_module("cli_schema_dotenv", SCHEMA_BODY)
        monkeypatch.delenv("ENVGUARD_CLI_PORT", raising=False)
        monkeypatch.delenv("ENVGUARD_CLI_IDS", raising=False)
        dotenv = tmp_path / "test.env"
        dotenv.write_text("ENVGUARD_CLI_PORT=9000\n")

        result = runner.invoke(main, ["check", f"{name}:SCHEMA", "--dotenv", str(dotenv)])

        assert result.exit_code == 0

    def test_bad_reference(self, runner):
        result = runner.invoke(main, ["check", "no_colon"])
        assert result.exit_code == 1
        assert "module:attribute" in result.output

    def test_unknown_module(self, runner):
        result = runner.invoke(main, ["check", "envguard_no_such_module:SCHEMA"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    @pytest.mark.parametrize(
        ("body", "error_name"),
        [("raise RuntimeError('boom')\n", "RuntimeError"), ("SCHEMA = {\n", "SyntaxError")],
    )
    def test_module_failing_on_import(self, runner, schema_module, body, error_name):
        name = schema_module(f"cli_schema_broken_{error_name.lower()}", body)

        result = runner.invoke(main, ["check", f"{name}:SCHEMA"])

        assert result.exit_code == 1
        assert "Error: could not import" in result.output
        assert error_name in result.output
        assert not isinstance(result.exception, (RuntimeError, SyntaxError))


class TestShow:
    def test_whole_tree(self, runner, tmp_path):
        (tmp_path / "example.json").write_text('{"foo": "bar", "items": [1, 2]}')
        result = runner.invoke(main, ["show", str(tmp_path)])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"example": {"foo": "bar", "items": [1, 2]}}

    def test_single_key(self, runner, tmp_path):
        (tmp_path / "example.json").write_text('{"foo": "bar"}')
        result = runner.invoke(main, ["show", str(tmp_path), "--key", "example.foo"])
        assert result.exit_code == 0
        assert json.loads(result.output) == "bar"

    def test_unknown_key(self, runner, tmp_path):
        (tmp_path / "example.json").write_text('{"foo": "bar"}')
        result = runner.invoke(main, ["show", str(tmp_path), "--key", "example.nope"])
        assert result.exit_code == 1
        assert "is not set" in result.output

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(main, ["show", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "could not be accessed" in result.output

    def test_env_failure(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("ENVGUARD_SHOW_NEVER_SET", raising=False)
        (tmp_path / "app.py").write_text(
            "from envguard.env import Env, FieldRule\n"
            'Env({"ENVGUARD_SHOW_NEVER_SET": FieldRule.string(required=True)})\n'
        )
        result = runner.invoke(main, ["show", str(tmp_path)])
        assert result.exit_code == 1
        assert "ENVGUARD_SHOW_NEVER_SET" in result.output
