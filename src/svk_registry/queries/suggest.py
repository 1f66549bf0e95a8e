"""suggest handler: rule-based hints about which producer to run next."""

import re
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.queries.requests import SuggestQuery
from svk_registry.scanner import count_history_entries, scan_producer_states

CODE_DIRS = ("programs", "src", "contracts", "app", "lib")
TEST_DIRS = ("tests", "test", "__tests__")
STALE_AFTER_DAYS = 7
PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "info": 3}

_CRITICAL = re.compile(r"CRITICAL", re.IGNORECASE)
_HIGH = re.compile(r"\bHIGH\b", re.IGNORECASE)
_UNRESOLVED = re.compile(r"unresolved|open|pending|not\s+fixed", re.IGNORECASE)


@dataclass(frozen=True)
class Suggestion:
    suggestion: str
    priority: str
    reason: str


@dataclass(frozen=True)
class ReportFindings:
    critical_count: int
    high_count: int
    has_unresolved: bool


def _any_dir(project_dir: Path, names: tuple[str, ...]) -> bool:
    return any((project_dir / name).is_dir() for name in names)


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def scan_final_report(ctx: RegistryContext) -> ReportFindings | None:
    """Count CRITICAL/HIGH mentions in the current audit's final report."""
    try:
        content = ctx.project.read_text(".audit/FINAL_REPORT.md")
    except (OSError, ValueError):
        return None
    return ReportFindings(
        critical_count=len(_CRITICAL.findall(content)),
        high_count=len(_HIGH.findall(content)),
        has_unresolved=_UNRESOLVED.search(content) is not None,
    )


def collect_suggestions(ctx: RegistryContext) -> list[Suggestion]:
    """Evaluate every rule against the current project tree."""
    project_dir = ctx.project_dir
    states = {producer.skill: producer.state for producer in scan_producer_states(project_dir)}
    history_count = count_history_entries(project_dir)
    has_code = _any_dir(project_dir, CODE_DIRS)
    has_docs = (project_dir / ".docs").is_dir()
    has_audit = (project_dir / ".audit").is_dir()

    suggestions: list[Suggestion] = []

    if has_code and not has_docs:
        suggestions.append(
            Suggestion(
                suggestion="Run /GL:survey - no architecture docs found",
                priority="high",
                reason=(
                    "Code exists but no GL documentation has been generated. Architecture docs "
                    "help all downstream tools (including security audits) work better."
                ),
            )
        )

    gl_state = states.get("grand-library")
    if has_docs and gl_state is not None:
        updated = _parse_timestamp(gl_state.get("updated") or gl_state.get("last_updated"))
        if updated is not None:
            days = (ctx.time.now() - updated).days
            if days > STALE_AFTER_DAYS:
                suggestions.append(
                    Suggestion(
                        suggestion="Docs may be stale - consider /GL:update",
                        priority="medium",
                        reason=(
                            f"GL docs were last updated {days} days ago. If significant code "
                            "changes have been made, docs may be out of date."
                        ),
                    )
                )

    if has_code and not has_audit:
        suggestions.append(
            Suggestion(
                suggestion="Consider /SOS:scan before deployment",
                priority="high",
                reason=(
                    "No security audit found. Running SOS before deployment catches "
                    "vulnerabilities early."
                ),
            )
        )

    if has_audit:
        findings = scan_final_report(ctx)
        if (
            findings is not None
            and findings.has_unresolved
            and (findings.critical_count > 0 or findings.high_count > 0)
        ):
            suggestions.append(
                Suggestion(
                    suggestion=(
                        f"{findings.critical_count} CRITICAL + {findings.high_count} HIGH findings "
                        "may be unresolved - fix before launch"
                    ),
                    priority="critical",
                    reason="The audit report contains unresolved critical or high severity findings.",
                )
            )

    if history_count > 0 and not has_audit and has_code:
        suggestions.append(
            Suggestion(
                suggestion="Codebase changed since last audit - /SOS:scan for delta audit",
                priority="medium",
                reason=(
                    f"{history_count} previous audit(s) archived, but no current audit exists. "
                    "Code may have changed."
                ),
            )
        )

    if has_audit and has_code and not _any_dir(project_dir, TEST_DIRS):
        suggestions.append(
            Suggestion(
                suggestion="Consider test generation for audited code",
                priority="medium",
                reason=(
                    "Security audit exists but no test directory detected. Tests codify "
                    "invariants the audit identified."
                ),
            )
        )

    if not suggestions:
        suggestions.append(
            Suggestion(
                suggestion="Project looks solid",
                priority="info",
                reason="All expected SVK artifacts are present and no immediate actions detected.",
            )
        )

    return sorted(suggestions, key=lambda s: PRIORITY_ORDER.get(s.priority, 3))


def handle_suggest(ctx: RegistryContext, query: SuggestQuery) -> dict[str, Any]:
    return {"suggestions": [asdict(s) for s in collect_suggestions(ctx)]}
