"""search handler: case-insensitive substring search with line excerpts.

There is no index; each search walks its scope and reads the files through
the sandbox of the root they belong to.
"""

import logging
from dataclasses import dataclass
from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.io.sandbox import PathTraversalError, SandboxedRoot
from svk_registry.io.tree import collect_artifact_files
from svk_registry.models.source import SourceKind
from svk_registry.queries.requests import SearchQuery
from svk_registry.queries.responses import error_response, invalid_choice
from svk_registry.registry import sandbox_for

logger = logging.getLogger(__name__)

PROJECT_SOURCE = "project"
SEARCHABLE_SUFFIXES = (".md", ".json")
MAX_EXCERPTS_PER_FILE = 3
CONTEXT_LINES = 2

PROJECT_SCOPES: dict[str, tuple[str, ...]] = {
    "docs": (".docs",),
    "audit": (".audit", ".audit-history", ".bulwark", ".bulwark-history"),
    "decisions": (".docs/DECISIONS",),
    "all": (".docs", ".audit", ".audit-history", ".bulwark", ".bulwark-history", ".svk"),
}
KNOWLEDGE_SCOPE = "knowledge"
SCOPES = [*PROJECT_SCOPES, KNOWLEDGE_SCOPE]
DEFAULT_SCOPE = "all"


@dataclass(frozen=True)
class SearchRoot:
    """One sandbox to search and the directories inside it that are in scope."""

    source: str
    sandbox: SandboxedRoot
    directories: tuple[str, ...]
    allowed_files: tuple[str, ...] | None = None  # Static sources expose only these


@dataclass(frozen=True)
class Excerpt:
    line: int  # 1-based
    excerpt: str


def find_excerpts(content: str, query: str, max_excerpts: int = MAX_EXCERPTS_PER_FILE) -> list[Excerpt]:
    """Return up to ``max_excerpts`` matching lines with surrounding context."""
    needle = query.lower()
    lines = content.split("\n")
    excerpts: list[Excerpt] = []
    for index, line in enumerate(lines):
        if needle not in line.lower():
            continue
        start = max(0, index - CONTEXT_LINES)
        end = min(len(lines), index + CONTEXT_LINES + 1)
        excerpts.append(Excerpt(line=index + 1, excerpt="\n".join(lines[start:end])))
        if len(excerpts) >= max_excerpts:
            break
    return excerpts


def search_roots(ctx: RegistryContext, scope: str) -> list[SearchRoot]:
    """Roots to search for ``scope``, in result order."""
    if scope == KNOWLEDGE_SCOPE:
        return [
            SearchRoot(
                source=source.source_id,
                sandbox=sandbox_for(source, ctx.repo_dir),
                directories=(".",),
                allowed_files=source.static_files if source.kind == SourceKind.STATIC else None,
            )
            for source in ctx.registry.list_sources()
        ]
    return [SearchRoot(source=PROJECT_SOURCE, sandbox=ctx.project, directories=PROJECT_SCOPES[scope])]


def _candidate_paths(root: SearchRoot) -> list[str]:
    if root.allowed_files is not None:
        return sorted(name for name in root.allowed_files if root.sandbox.exists(name))

    paths: set[str] = set()
    for directory in root.directories:
        for file_path in collect_artifact_files(root.sandbox.base / directory, SEARCHABLE_SUFFIXES):
            try:
                paths.add(root.sandbox.relative(file_path))
            except PathTraversalError:
                logger.debug("Skipping %s: resolves outside %s", file_path, root.source)
    return sorted(paths)


def _search_root(
    root: SearchRoot, query: str, errors: list[dict[str, str]]
) -> tuple[int, list[dict[str, Any]]]:
    scanned = 0
    results: list[dict[str, Any]] = []
    for path in _candidate_paths(root):
        try:
            content = root.sandbox.read_text(path)
        except FileNotFoundError:
            continue
        except PathTraversalError:
            continue
        except (UnicodeDecodeError, OSError):
            logger.debug("Skipping unreadable %s:%s", root.source, path)
            errors.append({"source": root.source, "path": path, "error": "Unreadable file"})
            continue
        scanned += 1

        excerpts = find_excerpts(content, query)
        if excerpts:
            results.append(
                {
                    "source": root.source,
                    "path": path,
                    "matches": [{"line": e.line, "excerpt": e.excerpt} for e in excerpts],
                }
            )
    return scanned, results


def handle_search(ctx: RegistryContext, query: SearchQuery) -> dict[str, Any]:
    if not query.query or not query.query.strip():
        return error_response("Search query is required.")

    scope = query.scope or DEFAULT_SCOPE
    if scope not in SCOPES:
        return invalid_choice("scope", scope, SCOPES)

    scanned = 0
    results: list[dict[str, Any]] = []
    errors: list[dict[str, str]] = []
    for root in search_roots(ctx, scope):
        root_scanned, root_results = _search_root(root, query.query, errors)
        scanned += root_scanned
        results.extend(root_results)

    response: dict[str, Any] = {
        "query": query.query,
        "scope": scope,
        "total_files_matched": len(results),
        "results": results,
    }
    if scanned == 0 and not errors:
        response["message"] = f'No SVK artifacts found in scope "{scope}".'
    elif not results:
        response["message"] = f'No results for "{query.query}" in scope "{scope}".'
    if errors:
        response["errors"] = errors
    return response
