"""Generic dispatch: run any primitive by name with JSON arguments."""

import json
from typing import Any

import click

from svk_registry.context import RegistryContext
from svk_registry.error_boundary import cli_error_boundary
from svk_registry.output import emit_json
from svk_registry.queries import run_primitive


def parse_arguments(raw: str | None) -> dict[str, Any]:
    """Decode ``--args``; it must be a JSON object.

    Raises:
        ValueError: If the text is not valid JSON or not an object
    """
    if not raw:
        return {}
    try:
        arguments = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"--args is not valid JSON: {e.msg}") from e
    if not isinstance(arguments, dict):
        raise ValueError("--args must be a JSON object")
    return arguments


@click.command("query")
@click.argument("primitive")
@click.option("--args", "raw_args", help='Arguments as a JSON object, e.g. \'{"source": "svk"}\'')
@click.pass_obj
@cli_error_boundary
def query_cmd(ctx: RegistryContext, primitive: str, raw_args: str | None) -> None:
    """Run PRIMITIVE with JSON arguments.

    \b
    Primitives: status, get-doc, get-decisions, get-audit, search,
    list-knowledge, read-knowledge, suggest
    """
    emit_json(run_primitive(ctx, primitive, parse_arguments(raw_args)))
