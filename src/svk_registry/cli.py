"""Entry point for the `svk` command line."""

import logging
from pathlib import Path

import click

from svk_registry.commands.audit import audit_cmd
from svk_registry.commands.docs import decisions_cmd, doc_cmd
from svk_registry.commands.knowledge import knowledge_group
from svk_registry.commands.query import query_cmd
from svk_registry.commands.search import search_cmd
from svk_registry.commands.status import status_cmd
from svk_registry.commands.suggest import suggest_cmd
from svk_registry.config import RegistryConfig
from svk_registry.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

DEBUG_FORMAT = "[DEBUG %(name)s:%(lineno)d] %(message)s"


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="svk-registry")
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root holding producer state (default: $SVK_PROJECT_DIR or cwd)",
)
@click.option(
    "--repo-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root the knowledge sources live under (default: $SVK_REPO_DIR or project root)",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, project_dir: Path | None, repo_dir: Path | None, debug: bool) -> None:
    """Query SVK project state and bundled knowledge bases."""
    config = RegistryConfig.from_env().with_overrides(
        project_dir=project_dir, repo_dir=repo_dir, debug=debug
    )
    if config.debug:
        logging.basicConfig(level=logging.DEBUG, format=DEBUG_FORMAT)

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(config)


cli.add_command(status_cmd)
cli.add_command(doc_cmd)
cli.add_command(decisions_cmd)
cli.add_command(audit_cmd)
cli.add_command(search_cmd)
cli.add_command(suggest_cmd)
cli.add_command(knowledge_group)
cli.add_command(query_cmd)


def main() -> None:
    """CLI entry point used by the `svk` console script."""
    cli()
