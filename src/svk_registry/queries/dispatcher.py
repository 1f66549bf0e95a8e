"""Single entry point that answers every query primitive.

``dispatch`` matches on the closed ``Query`` union and always returns a
JSON-serializable dict. Failures inside a handler come back inline; a failing
query never prevents the next one from succeeding.
"""

import logging
from typing import Any, assert_never

from svk_registry.context import RegistryContext
from svk_registry.queries.audit import handle_get_audit
from svk_registry.queries.docs import handle_get_decisions, handle_get_doc
from svk_registry.queries.knowledge import handle_list_knowledge, handle_read_knowledge
from svk_registry.queries.requests import (
    GetAuditQuery,
    GetDecisionsQuery,
    GetDocQuery,
    ListKnowledgeQuery,
    Query,
    ReadKnowledgeQuery,
    SearchQuery,
    StatusQuery,
    SuggestQuery,
    parse_query,
)
from svk_registry.queries.responses import exception_response
from svk_registry.queries.search import handle_search
from svk_registry.queries.status import handle_status
from svk_registry.queries.suggest import handle_suggest

logger = logging.getLogger(__name__)


def _route(ctx: RegistryContext, query: Query) -> dict[str, Any]:
    match query:
        case StatusQuery():
            return handle_status(ctx, query)
        case GetDocQuery():
            return handle_get_doc(ctx, query)
        case GetDecisionsQuery():
            return handle_get_decisions(ctx, query)
        case GetAuditQuery():
            return handle_get_audit(ctx, query)
        case SearchQuery():
            return handle_search(ctx, query)
        case ListKnowledgeQuery():
            return handle_list_knowledge(ctx, query)
        case ReadKnowledgeQuery():
            return handle_read_knowledge(ctx, query)
        case SuggestQuery():
            return handle_suggest(ctx, query)
        case _:
            assert_never(query)


def dispatch(ctx: RegistryContext, query: Query) -> dict[str, Any]:
    """Answer one query against the current filesystem.

    Args:
        ctx: Query context (locations, registry, clock)
        query: The request to answer

    Returns:
        Result dict; errors are reported inline, never raised
    """
    logger.debug("Dispatching %r", query)
    try:
        return _route(ctx, query)
    except (OSError, ValueError) as e:
        logger.debug("Query %s failed: %s", type(query).__name__, e)
        return exception_response(e)


def run_primitive(
    ctx: RegistryContext, primitive: str, arguments: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Parse raw arguments for ``primitive`` and dispatch the resulting query."""
    parsed = parse_query(primitive, arguments)
    if isinstance(parsed, dict):
        return parsed
    return dispatch(ctx, parsed)
