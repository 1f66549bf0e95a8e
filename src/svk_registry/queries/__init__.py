from svk_registry.queries.dispatcher import dispatch, run_primitive
from svk_registry.queries.requests import (
    PRIMITIVES,
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

__all__ = [
    "PRIMITIVES",
    "GetAuditQuery",
    "GetDecisionsQuery",
    "GetDocQuery",
    "ListKnowledgeQuery",
    "Query",
    "ReadKnowledgeQuery",
    "SearchQuery",
    "StatusQuery",
    "SuggestQuery",
    "dispatch",
    "parse_query",
    "run_primitive",
]
