"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from ecom.application.category_datatable import CategoryDataTableHandler
from ecom.application.category_tree import CategoryTreeHandler
from ecom.application.create_category import CreateCategoryHandler
from ecom.application.delete_category import DeleteCategoryHandler
from ecom.application.dto import CategoryDTO, CategoryTreeNode, DataTableRequest
from ecom.application.get_category import GetCategoryHandler
from ecom.application.list_child_categories import ListChildCategoriesHandler
from ecom.application.update_category import UpdateCategoryHandler
from ecom.application.update_category_parent import UpdateCategoryParentHandler
from ecom.application.update_category_status import UpdateCategoryStatusHandler
from ecom.domain.exceptions import DomainException
from ecom.infrastructure.bootstrap import unit_of_work
from ecom.infrastructure.cli.formatting import (
    datatable_options,
    domain_error,
    echo_json,
    parse_order,
)


def _display_category(dto: CategoryDTO) -> None:
    status = "active" if dto.is_active else "inactive"
    click.echo(f"Category {dto.id}  ({status}, v{dto.version})")
    click.echo(f"  Name:  {dto.name}")
    click.echo(f"  Slug:  {dto.slug}")
    click.echo(f"  Path:  {dto.path}  (level {dto.level})")
    if dto.description:
        click.echo(f"  About: {dto.description}")


@click.command("create")
@click.option("--name", required=True, help="Category name.")
@click.option("--slug", default=None, help="URL slug (derived from the name if omitted).")
@click.option("--description", default="", help="Description.")
@click.option("--parent", "parent_id", default=None, help="Parent category ID.")
@click.option("--inactive", is_flag=True, default=False, help="Create as inactive.")
def category_create(
    name: str, slug: str | None, description: str, parent_id: str | None, inactive: bool
) -> None:
    """Create a category (a root unless --parent is given)."""
    handler = CreateCategoryHandler(unit_of_work())

    try:
        dto = handler.handle(
            name=name,
            slug=slug,
            description=description,
            parent_id=parent_id,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Category {dto.id} '{dto.name}' created at {dto.path}")


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--slug", default=None, help="New slug.")
@click.option("--description", default=None, help="New description.")
def category_update(
    category_id: str, name: str | None, slug: str | None, description: str | None
) -> None:
    """Rename a category (descendant paths follow)."""
    uow = unit_of_work()

    try:
        current = GetCategoryHandler(uow).handle(category_id)
        dto = UpdateCategoryHandler(uow).handle(
            category_id=current.id,
            name=name if name is not None else current.name,
            slug=slug if slug is not None else current.slug,
            description=description,
        )
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Category {dto.id} updated, path is now {dto.path}")


@click.command("move")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--parent", "parent_id", default=None, help="New parent category ID.")
@click.option("--root", is_flag=True, default=False, help="Make the category a root.")
def category_move(category_id: str, parent_id: str | None, root: bool) -> None:
    """Move a category under another one, or to the root."""
    if root == (parent_id is not None):
        raise click.UsageError("Give exactly one of --parent or --root")

    handler = UpdateCategoryParentHandler(unit_of_work())

    try:
        dto = handler.handle(category_id, None if root else parent_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Category {dto.id} moved to {dto.path} (level {dto.level})")


@click.command("status")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--active/--inactive", required=True, help="New status.")
def category_status(category_id: str, active: bool) -> None:
    """Activate or deactivate a category."""
    handler = UpdateCategoryStatusHandler(unit_of_work())

    try:
        dto = handler.handle(category_id, active)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Category {dto.id} is now {'active' if dto.is_active else 'inactive'}")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_delete(category_id: str) -> None:
    """Delete a category without children or products."""
    handler = DeleteCategoryHandler(unit_of_work())

    try:
        handler.handle(category_id)
    except DomainException as exc:
        raise domain_error(exc)

    click.echo(f"Category {category_id} deleted.")


@click.command("show")
@click.option("--id", "category_id", required=True, help="Category ID or slug.")
def category_show(category_id: str) -> None:
    """Show a category."""
    handler = GetCategoryHandler(unit_of_work())

    try:
        dto = handler.handle(category_id)
    except DomainException as exc:
        raise domain_error(exc)

    _display_category(dto)


@click.command("children")
@click.option("--parent", "parent_id", default=None, help="Parent ID (roots if omitted).")
def category_children(parent_id: str | None) -> None:
    """List the direct children of a category, sorted by name."""
    handler = ListChildCategoriesHandler(unit_of_work())

    try:
        children = handler.handle(parent_id)
    except DomainException as exc:
        raise domain_error(exc)

    if not children:
        click.echo("No categories found.")
        return
    for dto in children:
        click.echo(f"{dto.id:<34} {dto.name:<24} {dto.path}")


def _echo_tree(nodes: list[CategoryTreeNode], depth: int = 0) -> None:
    for node in nodes:
        marker = "" if node.is_active else "  (inactive)"
        click.echo(f"{'  ' * depth}- {node.name} [{node.slug}]{marker}")
        _echo_tree(node.children, depth + 1)


@click.command("tree")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive branches.")
def category_tree(active_only: bool) -> None:
    """Print the category tree."""
    handler = CategoryTreeHandler(unit_of_work())

    try:
        roots = handler.handle(active_only=active_only)
    except DomainException as exc:
        raise domain_error(exc)

    if not roots:
        click.echo("No categories found.")
        return
    _echo_tree(roots)


@click.command("list")
@datatable_options
def category_list(
    draw: int, search: str, start: int, length: int, order: tuple[str, ...], as_json: bool
) -> None:
    """List categories page by page."""
    handler = CategoryDataTableHandler(unit_of_work())
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

    click.echo(f"{'Name':<24} {'Slug':<20} {'Path':<36} {'Active':>6}")
    click.echo("-" * 89)
    for dto in result.data:
        click.echo(
            f"{dto.name:<24} {dto.slug:<20} {dto.path:<36} {'yes' if dto.is_active else 'no':>6}"
        )
    click.echo(f"Showing {len(result.data)} of {result.records_filtered} "
               f"(total {result.records_total})")
