"""Knowledge command group."""

import click

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json
from svk_registry.queries import ListKnowledgeQuery, ReadKnowledgeQuery, dispatch


@click.group("knowledge")
def knowledge_group() -> None:
    """Browse bundled knowledge bases."""
    pass


@knowledge_group.command("list")
@click.argument("source_id", required=False)
@click.pass_obj
def list_knowledge(ctx: RegistryContext, source_id: str | None) -> None:
    """List all knowledge bases, or the categories and files of SOURCE_ID."""
    emit_json(dispatch(ctx, ListKnowledgeQuery(source_id=source_id)))


@knowledge_group.command("read")
@click.argument("source_id")
@click.argument("path", required=False)
@click.pass_obj
def read_knowledge(ctx: RegistryContext, source_id: str, path: str | None) -> None:
    """Read PATH from SOURCE_ID (its primary index when PATH is omitted)."""
    emit_json(dispatch(ctx, ReadKnowledgeQuery(source_id=source_id, path=path)))
