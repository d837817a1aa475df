"""Command line entry points: validate an env schema, inspect a config directory."""

from __future__ import annotations

import importlib
import json
import os
import sys
from typing import Any, Mapping

import click

from .._tree import thaw
from .._types import UNDEFINED, ConfigError, EnvError, ValidationFailedError
from ..config import load_config
from ..env import Env, FieldRule, OsEnvSource


def import_schema(reference: str) -> Mapping[str, FieldRule]:
    """Import a schema from a ``module:attribute`` reference.

    The current directory is put on ``sys.path`` first so project modules
    resolve when running as the installed ``envguard`` script.

    Raises ``ValueError`` when the reference is malformed or does not name a
    mapping.
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Schema reference must look like 'module:attribute', got {reference!r}")
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(module_name)
    schema = getattr(module, attribute, UNDEFINED)
    if not isinstance(schema, Mapping):
        raise ValueError(f"{reference!r} is not a schema mapping")
    return schema


def _report_env_error(error: EnvError) -> None:
    click.secho(f"Error: {error}", fg="red", err=True)
    if isinstance(error, ValidationFailedError):
        for message in error.messages:
            click.echo(f"  - {message}", err=True)


def _to_json(value: Any) -> str:
    return json.dumps(thaw(value), indent=2, default=str, sort_keys=True)


@click.group("envguard")
def main() -> None:
    """Validated environment variables and directory configs."""
    pass


@main.command("check")
@click.argument("schema")
@click.option(
    "--dotenv",
    "dotenv_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Dotenv file whose values fill in unset variables.",
)
def check_cli(schema: str, dotenv_path: str | None) -> None:
    """Validate the environment against SCHEMA (``module:attribute``).

    Examples:\n
        envguard check myapp.settings:ENV_SCHEMA\n
        envguard check myapp.settings:ENV_SCHEMA --dotenv .env\n
    """
    try:
        rules = import_schema(schema)
    except (ImportError, ValueError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Error: could not import {schema!r}: {type(e).__name__}: {e}", fg="red", err=True)
        sys.exit(1)

    try:
        env = Env(rules, source=OsEnvSource(dotenv_path))
    except EnvError as e:
        _report_env_error(e)
        sys.exit(1)

    declared = sum(1 for key in rules if key in env)
    click.secho(f"OK: {declared} variables validated", fg="green")


@main.command("show")
@click.argument("directory", type=click.Path())
@click.option("--key", default=None, help="Dotted path of the value to print.")
def show_cli(directory: str, key: str | None) -> None:
    """Load the config files in DIRECTORY and print them as JSON."""
    try:
        config = load_config(directory)
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except EnvError as e:
        _report_env_error(e)
        sys.exit(1)

    if key is None:
        click.echo(_to_json(config.root))
        return
    if key not in config:
        click.secho(f"Error: key {key!r} is not set", fg="red", err=True)
        sys.exit(1)
    click.echo(_to_json(config.get(key)))
