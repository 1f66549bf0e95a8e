"""list-knowledge and read-knowledge handlers."""

from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.io.sandbox import PathTraversalError, normalize_relative_path
from svk_registry.queries.requests import ListKnowledgeQuery, ReadKnowledgeQuery
from svk_registry.queries.responses import error_response, invalid_path
from svk_registry.registry import describe_overview, describe_source, sandbox_for

BROWSE_HINT = "Use list-knowledge to browse available files"


def handle_list_knowledge(ctx: RegistryContext, query: ListKnowledgeQuery) -> dict[str, Any]:
    if not query.source_id:
        return describe_overview(ctx.registry, ctx.repo_dir)

    source = ctx.registry.get(query.source_id)
    if source is None:
        return ctx.registry.unknown_source(query.source_id)
    return describe_source(source, ctx.repo_dir)


def handle_read_knowledge(ctx: RegistryContext, query: ReadKnowledgeQuery) -> dict[str, Any]:
    source = ctx.registry.get(query.source_id)
    if source is None:
        return ctx.registry.unknown_source(query.source_id)

    relative_path = query.path
    if not relative_path:
        if source.primary_index is None:
            return error_response(
                f"{source.name} has no primary index. Specify a file path.",
                files=list(source.static_files),
                hint=BROWSE_HINT,
            )
        relative_path = source.primary_index

    # Lexical check happens before anything touches the filesystem
    try:
        normalized = normalize_relative_path(relative_path)
    except PathTraversalError:
        return invalid_path()

    sandbox = sandbox_for(source, ctx.repo_dir)
    try:
        content = sandbox.read_text(normalized)
    except PathTraversalError:
        return invalid_path()
    except FileNotFoundError:
        return error_response(f"File not found: {normalized}", hint=BROWSE_HINT)
    except UnicodeDecodeError:
        return error_response(f"Unreadable file: {normalized}", hint="File is not UTF-8 text")

    return {"source": source.source_id, "path": normalized, "content": content}
