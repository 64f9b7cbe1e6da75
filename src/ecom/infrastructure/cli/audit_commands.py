"""CLI commands for the audit trail."""

from __future__ import annotations

import json

import click

from ecom.application.get_audit_trail import GetAuditTrailHandler
from ecom.domain.exceptions import DomainException
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import domain_error, echo_json


@click.command("show")
@click.option("--type", "entity_type", required=True, help="Entity type, e.g. Category or Product.")
@click.option("--id", "entity_id", required=True, help="Entity ID.")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON.")
def audit_show(entity_type: str, entity_id: str, as_json: bool) -> None:
    """Show every recorded change of one entity, oldest first."""
    handler = GetAuditTrailHandler(unit_of_work())

    try:
        logs = handler.handle(entity_type, entity_id)
    except DomainException as exc:
        raise domain_error(exc)

    if as_json:
        echo_json([vars(log) for log in logs])
        return

    if not logs:
        click.echo("No audit records found.")
        return

    for log in logs:
        click.echo(f"{log.created_at}  {log.action:<6}  {', '.join(log.changed_fields)}")
        for name in log.changed_fields:
            old = json.dumps(log.old_values.get(name), default=str)
            new = json.dumps(log.new_values.get(name), default=str)
            click.echo(f"    {name}: {old} -> {new}")
