"""Audit command implementation."""

import click

from svk_registry.context import RegistryContext
from svk_registry.output import emit_json
from svk_registry.queries import GetAuditQuery, dispatch
from svk_registry.queries.audit import AUDIT_LAYOUTS, AUDIT_TYPES


@click.command("audit")
@click.option(
    "--type",
    "audit_type",
    type=click.Choice(AUDIT_TYPES),
    default=None,
    help="What to read (default: report)",
)
@click.option("--subsystem", help="Only findings for this subsystem")
@click.option("--severity", help="Only findings of this severity")
@click.option("--audit", help="current, previous, or an archive path")
@click.option(
    "--skill",
    type=click.Choice(list(AUDIT_LAYOUTS)),
    default=None,
    help="Auditing producer (default: sos)",
)
@click.pass_obj
def audit_cmd(
    ctx: RegistryContext,
    audit_type: str | None,
    subsystem: str | None,
    severity: str | None,
    audit: str | None,
    skill: str | None,
) -> None:
    """Read audit reports and findings."""
    query = GetAuditQuery(
        type=audit_type, subsystem=subsystem, severity=severity, audit=audit, skill=skill
    )
    emit_json(dispatch(ctx, query))
