"""get-audit handler: audit reports and findings from the project tree."""

import logging
from dataclasses import dataclass
from typing import Any

from svk_registry.context import RegistryContext
from svk_registry.io.frontmatter import parse_document
from svk_registry.io.sandbox import PathTraversalError, SandboxedRoot, normalize_relative_path
from svk_registry.io.tree import list_markdown_files, list_subdirectories
from svk_registry.queries.requests import GetAuditQuery
from svk_registry.queries.responses import (
    INVALID_PATH,
    error_response,
    invalid_choice,
    invalid_path,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditLayout:
    """Where one auditing producer keeps its current run and its archive."""

    audit_dir: str
    history_dir: str
    scan_command: str


AUDIT_LAYOUTS = {
    "sos": AuditLayout(audit_dir=".audit", history_dir=".audit-history", scan_command="/SOS:scan"),
    "db": AuditLayout(audit_dir=".bulwark", history_dir=".bulwark-history", scan_command="/DB:scan"),
}
DEFAULT_AUDIT_SKILL = "sos"

# Document types backed by a single file in the audit directory
DOCUMENT_FILES = {
    "report": "FINAL_REPORT.md",
    "architecture": "ARCHITECTURE.md",
    "strategies": "STRATEGIES.md",
}
MISSING_MESSAGES = {
    "report": "No final report found. The audit may not have reached the report phase yet.",
    "architecture": "No architecture document found.",
    "strategies": "No strategies document found.",
}
AUDIT_TYPES = ["report", "findings", "architecture", "strategies"]
DEFAULT_AUDIT_TYPE = "report"
FINDINGS_DIR = "findings"

# Frontmatter keys consulted before falling back to the file body
SUBSYSTEM_KEYS = ("subsystem", "component")
SEVERITY_KEYS = ("severity",)


def resolve_audit_dir(ctx: RegistryContext, layout: AuditLayout, audit: str | None) -> str | None:
    """Pick the audit directory, relative to the project root.

    Args:
        ctx: Query context
        layout: Directories of the selected auditing producer
        audit: ``"current"``/None, ``"previous"``, or an archive path

    Returns:
        Relative directory, or None when ``"previous"`` has no archive

    Raises:
        PathTraversalError: If an explicit archive path leaves the project
    """
    if not audit or audit == "current":
        return layout.audit_dir
    if audit == "previous":
        archives = list_subdirectories(ctx.project_dir / layout.history_dir)
        if not archives:
            return None
        # Archive names are dated, so the lexicographically last is most recent
        return f"{layout.history_dir}/{archives[-1]}"

    normalized = normalize_relative_path(audit)
    ctx.project.resolve(normalized)
    return normalized


def _matches(document_text: str, metadata_value: str, wanted: str) -> bool:
    if metadata_value:
        return wanted in metadata_value.lower()
    return wanted in document_text.lower()


def get_findings(
    project: SandboxedRoot, audit_dir: str, subsystem: str | None, severity: str | None
) -> dict[str, Any]:
    """Read findings, narrowing by subsystem and severity (case-insensitive).

    Frontmatter ``subsystem``/``component`` and ``severity`` fields decide the
    match when present; otherwise filename and body are searched.
    """
    findings_dir = f"{audit_dir}/{FINDINGS_DIR}"
    if not (project.base / findings_dir).is_dir():
        return {"count": 0, "findings": [], "message": "No findings directory found."}

    findings: list[dict[str, str]] = []
    errors: list[dict[str, str]] = []
    for filename in list_markdown_files(project.base / findings_dir):
        path = f"{findings_dir}/{filename}"
        try:
            content = project.read_text(path)
        except FileNotFoundError:
            continue
        except PathTraversalError:
            errors.append({"path": path, "error": INVALID_PATH})
            continue
        except (UnicodeDecodeError, OSError):
            logger.debug("Unreadable finding: %s", path)
            errors.append({"path": path, "error": "Unreadable file"})
            continue

        document = parse_document(content)
        searchable = f"{filename}\n{content}"
        if subsystem and not _matches(
            searchable, document.metadata_text(*SUBSYSTEM_KEYS), subsystem.lower()
        ):
            continue
        if severity and not _matches(
            searchable, document.metadata_text(*SEVERITY_KEYS), severity.lower()
        ):
            continue
        findings.append({"file": filename, "path": path, "content": content})

    result: dict[str, Any] = {"count": len(findings), "findings": findings}
    if errors:
        result["errors"] = errors
    return result


def _read_document(project: SandboxedRoot, audit_dir: str, audit_type: str) -> dict[str, Any]:
    path = f"{audit_dir}/{DOCUMENT_FILES[audit_type]}"
    try:
        content = project.read_text(path)
    except FileNotFoundError:
        return {"message": MISSING_MESSAGES[audit_type]}
    except PathTraversalError:
        return invalid_path()
    except UnicodeDecodeError:
        return error_response(f"Unreadable file: {path}")
    return {"type": audit_type, "path": path, "content": content}


def handle_get_audit(ctx: RegistryContext, query: GetAuditQuery) -> dict[str, Any]:
    skill = query.skill or DEFAULT_AUDIT_SKILL
    layout = AUDIT_LAYOUTS.get(skill)
    if layout is None:
        return invalid_choice("audit skill", skill, list(AUDIT_LAYOUTS))

    audit_type = query.type or DEFAULT_AUDIT_TYPE
    if audit_type not in AUDIT_TYPES:
        return invalid_choice("audit type", audit_type, AUDIT_TYPES)

    try:
        audit_dir = resolve_audit_dir(ctx, layout, query.audit)
    except PathTraversalError:
        return invalid_path()

    if audit_dir is None:
        return {
            "message": f"No {skill} audit found. Run {layout.scan_command} to start a security audit."
        }

    if audit_type == "findings":
        return get_findings(ctx.project, audit_dir, query.subsystem, query.severity)
    return _read_document(ctx.project, audit_dir, audit_type)
