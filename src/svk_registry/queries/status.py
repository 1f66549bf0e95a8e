"""status handler: discovered producer state plus a per-producer summary."""

from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.models.state import ProducerState
from svk_registry.queries.requests import StatusQuery
from svk_registry.scanner import count_history_entries, scan_producer_states

GRAND_LIBRARY = "grand-library"
STRONGHOLD = "stronghold-of-security"
BULWARK = "dinhs-bulwark"
BOOK_OF_KNOWLEDGE = "book-of-knowledge"

# Producers that have written state under more than one name
SKILL_ALIASES = {"BOK": BOOK_OF_KNOWLEDGE}

# Command to run once a phase is complete
NEXT_COMMANDS: dict[str, dict[str, str]] = {
    GRAND_LIBRARY: {
        "survey": "/GL:interview",
        "interview": "/GL:draft",
        "draft": "/GL:reconcile",
    },
    STRONGHOLD: {
        "scan": "/SOS:analyze",
        "analyze": "/SOS:strategize",
        "strategize": "/SOS:investigate",
        "investigate": "/SOS:report",
        "report": "/SOS:verify",
    },
    BULWARK: {
        "scan": "/DB:analyze",
        "analyze": "/DB:strategize",
        "strategize": "/DB:investigate",
        "investigate": "/DB:report",
        "report": "/DB:verify",
    },
    BOOK_OF_KNOWLEDGE: {
        "scan": "/BOK:analyze",
        "analyze": "/BOK:confirm",
        "confirm": "/BOK:generate",
        "generate": "/BOK:execute",
        "execute": "/BOK:report",
    },
}

GRAND_LIBRARY_RESUME = {
    "survey": "/GL:survey",
    "interview": "/GL:interview --resume",
    "draft": "/GL:draft",
    "reconcile": "/GL:reconcile",
}

RESUME_PREFIXES = {STRONGHOLD: "SOS", BULWARK: "DB", BOOK_OF_KNOWLEDGE: "BOK"}

NO_STATE_SUMMARY = "No SVK state found in this project."


def canonical_skill(skill: str) -> str:
    return SKILL_ALIASES.get(skill, skill)


def _section(state: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Walk nested mappings, treating anything missing or non-dict as empty."""
    current: Any = state
    for key in keys:
        if not isinstance(current, dict):
            return {}
        current = current.get(key)
    return current if isinstance(current, dict) else {}


def current_phase(state: dict[str, Any]) -> tuple[str, str]:
    """Determine (phase, status) from a state's ``phases`` mapping.

    The first phase in progress wins. Otherwise the last complete phase is
    current, and with nothing complete the first declared phase is pending.
    """
    phases = state.get("phases")
    if not isinstance(phases, dict):
        return "unknown", "unknown"

    last_complete: str | None = None
    for name, phase in phases.items():
        status = phase.get("status") if isinstance(phase, dict) else None
        if status == "in_progress":
            return name, "in_progress"
        if status == "complete":
            last_complete = name

    if last_complete is not None:
        return last_complete, "complete"
    first = next(iter(phases), "unknown")
    return first, "pending"


def next_step(skill: str, phase: str, status: str) -> str | None:
    """Suggest the command that resumes or follows ``phase``."""
    skill = canonical_skill(skill)

    if status == "in_progress":
        if skill == GRAND_LIBRARY:
            command = GRAND_LIBRARY_RESUME.get(phase)
            return f"Resume: {command}" if command else None
        prefix = RESUME_PREFIXES.get(skill)
        if prefix is None:
            return None
        if skill == BOOK_OF_KNOWLEDGE:
            return f"Resume: /{prefix}:{phase}"
        return f"Resume: /{prefix}:{phase} (auto-resumes)"

    if status == "complete":
        following = NEXT_COMMANDS.get(skill, {}).get(phase)
        if following:
            return f"Next: /clear then {following}"
        if skill == BOOK_OF_KNOWLEDGE:
            return "Verification complete"

    return None


def _progress(skill: str, state: dict[str, Any], phase: str, status: str) -> Any:
    phases = _section(state, "phases")
    if skill == GRAND_LIBRARY and status == "in_progress":
        if phase == "interview":
            interview = _section(phases, "interview")
            done = interview.get("topics_completed") or 0
            total = interview.get("topics_total") or 0
            return f"{done}/{total} topics"
        if phase == "draft":
            draft = _section(phases, "draft")
            return f"wave {draft.get('current_wave') or 0}/{draft.get('waves_total') or 0}"
    if skill in (STRONGHOLD, BULWARK) and phase == "investigate" and status == "in_progress":
        investigate = _section(phases, "investigate")
        done = investigate.get("batches_completed") or 0
        total = investigate.get("batches_total") or 0
        return f"{done}/{total} batches"
    if skill == BOOK_OF_KNOWLEDGE and phase == "execute" and status in ("complete", "in_progress"):
        execute = _section(phases, "execute")
        return {
            key: execute.get(key) or 0
            for key in ("proven", "stress_tested", "failed", "inconclusive")
        }
    return None


def format_skill_status(producer: ProducerState) -> dict[str, Any]:
    """Summarize one producer's state for display."""
    state = producer.state
    skill = canonical_skill(producer.skill)
    phase, status = current_phase(state)
    updated = str(state.get("updated") or state.get("last_updated") or "unknown").split("T")[0]

    info: dict[str, Any] = {
        "skill": producer.skill,
        "dir": producer.dir,
        "phase": phase,
        "status": status,
        "updated": updated,
    }

    if skill == GRAND_LIBRARY:
        info["project_name"] = state.get("project_name") or "unnamed"
    elif skill in (STRONGHOLD, BULWARK):
        info["audit_number"] = state.get("audit_number") or 1
        info["tier"] = _section(state, "config").get("tier") or "standard"
    elif skill == BOOK_OF_KNOWLEDGE:
        info["kani_available"] = bool(state.get("kani_available"))
        info["degraded_mode"] = bool(state.get("degraded_mode"))
        if phase == "analyze" and status == "complete":
            analyze = _section(state, "phases", "analyze")
            info["invariants_proposed"] = analyze.get("invariants_proposed") or 0

    progress = _progress(skill, state, phase, status)
    if progress is not None:
        info["progress"] = progress

    info["next"] = next_step(producer.skill, phase, status)
    return info


def _summary_line(info: dict[str, Any]) -> str:
    line = f"> {info['skill']}: {info['phase']} ({info['status']})"
    progress = info.get("progress")
    if isinstance(progress, dict):
        line += " - " + ", ".join(f"{key} {value}" for key, value in progress.items())
    elif progress:
        line += f" - {progress}"
    line += f" - updated {info['updated']}"
    if info.get("next"):
        line += f"\n  {info['next']}"
    return line


def build_summary(statuses: list[dict[str, Any]], history_count: int) -> str:
    """Human-readable summary of all producer statuses."""
    if not statuses and history_count == 0:
        return NO_STATE_SUMMARY
    lines = [_summary_line(info) for info in statuses]
    if history_count > 0:
        lines.append(f"History: {history_count} archived audit(s)")
    return "\n".join(lines)


def handle_status(ctx: RegistryContext, query: StatusQuery) -> dict[str, Any]:
    producers = scan_producer_states(ctx.project_dir)
    history_count = count_history_entries(ctx.project_dir)
    statuses = [format_skill_status(producer) for producer in producers]

    return {
        "states": [producer.to_dict() for producer in producers],
        "history_count": history_count,
        "skills": statuses,
        "summary": build_summary(statuses, history_count),
    }
