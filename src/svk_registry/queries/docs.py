"""get-doc and get-decisions handlers over the project's ``.docs`` tree."""

import logging
from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.io.frontmatter import describe_document, parse_document
from svk_registry.io.sandbox import PathTraversalError, SandboxedRoot
from svk_registry.io.tree import list_markdown_files
from svk_registry.queries.requests import GetDecisionsQuery, GetDocQuery
from svk_registry.queries.responses import INVALID_PATH, error_response, invalid_path

logger = logging.getLogger(__name__)

DOCS_DIR = ".docs"
DECISIONS_DIR = f"{DOCS_DIR}/DECISIONS"

NO_DOCS_MESSAGE = "No GL documentation found. Run /GL:survey to generate docs."
NO_DECISIONS_MESSAGE = "No decisions found. Decisions are captured during /GL:interview."


def _stem(filename: str) -> str:
    return filename.removesuffix(".md")


def _read_all(
    project: SandboxedRoot, directory: str, filenames: list[str]
) -> tuple[list[tuple[str, str]], list[dict[str, str]]]:
    """Read every file, collecting undecodable ones instead of failing the batch."""
    documents: list[tuple[str, str]] = []
    errors: list[dict[str, str]] = []
    for filename in filenames:
        path = f"{directory}/{filename}"
        try:
            documents.append((filename, project.read_text(path)))
        except FileNotFoundError:
            # Removed by its producer since the directory was listed
            continue
        except PathTraversalError:
            errors.append({"path": path, "error": INVALID_PATH})
        except (UnicodeDecodeError, OSError):
            logger.debug("Unreadable document: %s", path)
            errors.append({"path": path, "error": "Unreadable file"})
    return documents, errors


def list_docs(ctx: RegistryContext) -> dict[str, Any]:
    """List every generated document with a one-line description."""
    docs_dir = ctx.project_dir / DOCS_DIR
    if not docs_dir.is_dir():
        return {"documents": [], "message": NO_DOCS_MESSAGE}

    documents, errors = _read_all(ctx.project, DOCS_DIR, list_markdown_files(docs_dir))
    result: dict[str, Any] = {
        "documents": [
            {
                "name": _stem(filename),
                "path": f"{DOCS_DIR}/{filename}",
                "description": describe_document(content),
            }
            for filename, content in documents
        ]
    }
    if errors:
        result["errors"] = errors
    return result


def _match_document(ctx: RegistryContext, filenames: list[str], name: str) -> str | None:
    """Exact stem match, then filename substring, then frontmatter title."""
    wanted = name.lower()

    for filename in filenames:
        if _stem(filename).lower() == wanted:
            return filename
    for filename in filenames:
        if wanted in filename.lower():
            return filename
    for filename in filenames:
        try:
            content = ctx.project.read_text(f"{DOCS_DIR}/{filename}")
        except (OSError, ValueError):
            continue
        title = parse_document(content).metadata_text("title")
        if wanted in title.lower():
            return filename
    return None


def get_doc(ctx: RegistryContext, name: str) -> dict[str, Any]:
    """Fetch a single document by (partial) name."""
    docs_dir = ctx.project_dir / DOCS_DIR
    if not docs_dir.is_dir():
        return {"documents": [], "message": NO_DOCS_MESSAGE}

    filenames = list_markdown_files(docs_dir)
    match = _match_document(ctx, filenames, name)
    if match is None:
        return error_response(
            f'No document matching "{name}" found.',
            available=[_stem(filename) for filename in filenames],
        )

    path = f"{DOCS_DIR}/{match}"
    try:
        content = ctx.project.read_text(path)
    except PathTraversalError:
        return invalid_path()
    except FileNotFoundError:
        return error_response(f"File not found: {path}")
    except UnicodeDecodeError:
        return error_response(f"Unreadable file: {path}")
    return {"name": _stem(match), "path": path, "content": content}


def handle_get_doc(ctx: RegistryContext, query: GetDocQuery) -> dict[str, Any]:
    if query.name:
        return get_doc(ctx, query.name)
    return list_docs(ctx)


def _decision_matches(name: str, content: str, topic: str) -> bool:
    if topic in name.lower():
        return True
    document = parse_document(content)
    if topic in document.metadata_text("topic", "tags").lower():
        return True
    return topic in content.lower()


def handle_get_decisions(ctx: RegistryContext, query: GetDecisionsQuery) -> dict[str, Any]:
    filenames = list_markdown_files(ctx.project_dir / DECISIONS_DIR)
    if not filenames:
        return {"decisions": [], "message": NO_DECISIONS_MESSAGE}

    documents, errors = _read_all(ctx.project, DECISIONS_DIR, filenames)
    decisions = [
        {"name": _stem(filename), "path": f"{DECISIONS_DIR}/{filename}", "content": content}
        for filename, content in documents
    ]

    result: dict[str, Any]
    if query.topic:
        topic = query.topic.lower()
        matching = [d for d in decisions if _decision_matches(d["name"], d["content"], topic)]
        if not matching:
            result = {
                "decisions": [],
                "message": f'No decisions matching topic "{query.topic}".',
                "available_topics": [d["name"] for d in decisions],
            }
        else:
            result = {"decisions": matching}
    else:
        result = {"decisions": decisions}

    if errors:
        result["errors"] = errors
    return result
