"""CLI commands for the Attribute aggregate."""

from __future__ import annotations

import json

import click

from ecom.application.attribute_datatable import AttributeDataTableHandler
from ecom.application.create_attribute import CreateAttributeHandler
from ecom.application.delete_attribute import DeleteAttributeHandler
from ecom.application.dto import DataTableRequest
from ecom.application.update_attribute import UpdateAttributeHandler
from ecom.domain.exceptions import DomainException
from ecom.domain.model.attribute import AttributeType
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import (
    datatable_options,
    domain_error,
    echo_json,
    parse_order,
    parse_pairs,
)


def _parse_config_json(raw: str | None) -> dict | None:
    if raw is None:
        return None
    try:
        config = json.loads(raw)
    except ValueError:
        raise click.BadParameter("Configuration must be a JSON object.", param_hint="--config-json")
    if not isinstance(config, dict):
        raise click.BadParameter("Configuration must be a JSON object.", param_hint="--config-json")
    return config


@click.command("create")
@click.option("--name", required=True, help="System name (unique).")
@click.option(
    "--type",
    "attribute_type",
    required=True,
    type=click.Choice([t.value for t in AttributeType], case_sensitive=False),
    help="Attribute type.",
)
@click.option("--display-name", default=None, help="Label shown to shoppers.")
@click.option("--filterable", is_flag=True, default=False)
@click.option("--searchable", is_flag=True, default=False)
@click.option("--variant", "is_variant", is_flag=True, default=False, help="Use in variant combinations.")
@click.option("--config", "config_pairs", multiple=True, help="Configuration 'key=value' (repeatable).")
@click.option("--config-json", default=None, help="Whole configuration as a JSON object.")
def attribute_create(
    name: str,
    attribute_type: str,
    display_name: str | None,
    filterable: bool,
    searchable: bool,
    is_variant: bool,
    config_pairs: tuple[str, ...],
    config_json: str | None,
) -> None:
    """Create a product attribute."""
    configuration = _parse_config_json(config_json) or {}
    configuration.update(parse_pairs(config_pairs, "--config"))

    handler = CreateAttributeHandler(unit_of_work())

    try:
        dto = handler.handle(
            name=name,
            attribute_type=attribute_type,
            display_name=display_name,
            filterable=filterable,
            searchable=searchable,
            is_variant=is_variant,
            configuration=configuration,
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Attribute {dto.id} '{dto.name}' ({dto.type}) created")


@click.command("update")
@click.option("--id", "attribute_id", required=True, help="Attribute ID.")
@click.option("--display-name", default=None, help="New display name.")
@click.option("--filterable/--not-filterable", default=None)
@click.option("--searchable/--not-searchable", default=None)
@click.option("--variant/--not-variant", "is_variant", default=None)
@click.option("--config", "config_pairs", multiple=True, help="Set 'key=value'; 'key=null' removes (repeatable).")
@click.option("--config-json", default=None, help="Replace the whole configuration.")
def attribute_update(
    attribute_id: str,
    display_name: str | None,
    filterable: bool | None,
    searchable: bool | None,
    is_variant: bool | None,
    config_pairs: tuple[str, ...],
    config_json: str | None,
) -> None:
    """Update an attribute's label, flags or configuration."""
    handler = UpdateAttributeHandler(unit_of_work())

    try:
        dto = handler.handle(
            attribute_id=attribute_id,
            display_name=display_name,
            filterable=filterable,
            searchable=searchable,
            is_variant=is_variant,
            configuration=_parse_config_json(config_json),
            configuration_updates=parse_pairs(config_pairs, "--config"),
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Attribute {dto.id} updated: {json.dumps(dto.configuration)}")


@click.command("delete")
@click.option("--id", "attribute_id", required=True, help="Attribute ID.")
def attribute_delete(attribute_id: str) -> None:
    """Delete an attribute that no product or variant uses."""
    handler = DeleteAttributeHandler(unit_of_work())

    try:
        handler.handle(attribute_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Attribute {attribute_id} deleted.")


@click.command("list")
@datatable_options
def attribute_list(
    draw: int, search: str, start: int, length: int, order: tuple[str, ...], as_json: bool
) -> None:
    """List attributes page by page."""
    handler = AttributeDataTableHandler(unit_of_work())
    request = DataTableRequest(
        draw=draw, start=start, length=length, search=search, order=parse_order(order)
    )

    try:
        result = handler.handle(request)
    except DomainException as exc:
        raise domain_error(exc)

    if as_json:
        echo_json(result.to_dict())
        return

    click.echo(f"{'ID':<34} {'Name':<16} {'Type':<11} {'Flags':<8}")
    click.echo("-" * 72)
    for dto in result.data:
        flags = "".join(
            letter
            for letter, on in (("F", dto.filterable), ("S", dto.searchable), ("V", dto.is_variant))
            if on
        )
        click.echo(f"{dto.id:<34} {dto.name:<16} {dto.type:<11} {flags:<8}")
    click.echo(f"Showing {len(result.data)} of {result.records_filtered} "
               f"(total {result.records_total})")
