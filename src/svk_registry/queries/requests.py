"""Query request types.

Every primitive the registry answers is one frozen dataclass; ``Query`` is the
closed union the dispatcher matches on.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from svk_registry.queries.responses import error_response


@dataclass(frozen=True)
class StatusQuery:
    """Discovered producer states and archived audit count."""


@dataclass(frozen=True)
class GetDocQuery:
    """A generated document by (partial) name, or the full listing."""

    name: str | None = None


@dataclass(frozen=True)
class GetDecisionsQuery:
    """Decision records, optionally narrowed to a topic."""

    topic: str | None = None


@dataclass(frozen=True)
class GetAuditQuery:
    """Audit report, findings, architecture or strategies."""

    type: str | None = None
    subsystem: str | None = None
    severity: str | None = None
    audit: str | None = None
    skill: str | None = None


@dataclass(frozen=True)
class SearchQuery:
    """Case-insensitive full-text search over one scope."""

    query: str = ""
    scope: str | None = None


@dataclass(frozen=True)
class ListKnowledgeQuery:
    """Overview of all knowledge sources, or the detail of one."""

    source_id: str | None = None


@dataclass(frozen=True)
class ReadKnowledgeQuery:
    """One file of a knowledge source; its primary index when path is omitted."""

    source_id: str = ""
    path: str | None = None


@dataclass(frozen=True)
class SuggestQuery:
    """Rule-based suggestions for what to run next."""


Query = (
    StatusQuery
    | GetDocQuery
    | GetDecisionsQuery
    | GetAuditQuery
    | SearchQuery
    | ListKnowledgeQuery
    | ReadKnowledgeQuery
    | SuggestQuery
)

PRIMITIVES: dict[str, type[Query]] = {
    "status": StatusQuery,
    "get-doc": GetDocQuery,
    "get-decisions": GetDecisionsQuery,
    "get-audit": GetAuditQuery,
    "search": SearchQuery,
    "list-knowledge": ListKnowledgeQuery,
    "read-knowledge": ReadKnowledgeQuery,
    "suggest": SuggestQuery,
}

# Argument names callers may use instead of the field names
ARGUMENT_ALIASES = {"source": "source_id", "sourceId": "source_id"}

REQUIRED_ARGUMENTS: dict[type[Query], tuple[str, ...]] = {
    SearchQuery: ("query",),
    ReadKnowledgeQuery: ("source_id",),
}


def parse_query(primitive: str, arguments: Mapping[str, Any] | None = None) -> Query | dict[str, Any]:
    """Build a typed request from a primitive name and raw arguments.

    Args:
        primitive: Primitive name, e.g. ``"read-knowledge"``
        arguments: Raw argument mapping from the caller

    Returns:
        The request, or an inline error dict naming the valid primitives or
        arguments when the input cannot be turned into a request
    """
    query_type = PRIMITIVES.get(primitive)
    if query_type is None:
        return error_response(f"Unknown primitive: {primitive}", available=list(PRIMITIVES))

    field_names = [f.name for f in fields(query_type)]
    values: dict[str, Any] = {}
    for key, value in (arguments or {}).items():
        name = ARGUMENT_ALIASES.get(key, key)
        if name not in field_names:
            return error_response(
                f"Unknown argument for {primitive}: {key}",
                valid=field_names,
            )
        if value is not None and not isinstance(value, str):
            return error_response(f"Argument {key} must be a string")
        values[name] = value

    for name in REQUIRED_ARGUMENTS.get(query_type, ()):
        if not values.get(name):
            return error_response(f"Missing required argument for {primitive}: {name}")

    return query_type(**values)
