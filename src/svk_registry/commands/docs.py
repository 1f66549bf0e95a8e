"""Commands for generated documentation and decision records."""

import click

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json
from svk_registry.queries import GetDecisionsQuery, GetDocQuery, dispatch


@click.command("doc")
@click.argument("name", required=False)
@click.pass_obj
def doc_cmd(ctx: RegistryContext, name: str | None) -> None:
    """Show the document matching NAME, or list all documents."""
    emit_json(dispatch(ctx, GetDocQuery(name=name)))


@click.command("decisions")
@click.option("--topic", help="Only decisions mentioning this topic")
@click.pass_obj
def decisions_cmd(ctx: RegistryContext, topic: str | None) -> None:
    """Show recorded architectural decisions."""
    emit_json(dispatch(ctx, GetDecisionsQuery(topic=topic)))
