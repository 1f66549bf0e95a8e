"""Search command implementation."""

import click

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json
from svk_registry.queries import SearchQuery, dispatch
from svk_registry.queries.search import DEFAULT_SCOPE, SCOPES


@click.command("search")
@click.argument("query")
@click.option(
    "--scope",
    type=click.Choice(SCOPES),
    default=DEFAULT_SCOPE,
    show_default=True,
    help="Which artifacts to search",
)
@click.pass_obj
def search_cmd(ctx: RegistryContext, query: str, scope: str) -> None:
    """Search SVK artifacts for QUERY (case-insensitive)."""
    emit_json(dispatch(ctx, SearchQuery(query=query, scope=scope)))
