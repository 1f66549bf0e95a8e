"""Suggest command implementation."""

import click

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json
from svk_registry.queries import SuggestQuery, dispatch


@click.command("suggest")
@click.pass_obj
def suggest_cmd(ctx: RegistryContext) -> None:
    """Suggest which tool to run next."""
    emit_json(dispatch(ctx, SuggestQuery()))
