"""CLI commands for the literature catalog."""

from __future__ import annotations

import click

from litdist.application.add_literature import AddLiteratureHandler
from litdist.application.deactivate_literature import DeactivateLiteratureHandler
from litdist.application.list_literature import ListLiteratureHandler
from litdist.application.update_literature import UpdateLiteratureHandler
from litdist.infrastructure.bootstrap import literature_repository, order_repository
from litdist.infrastructure.cli.context import CliContext, handles_domain_errors, pass_cli_context


@click.command("add")
@click.option("--title", required=True, help="Title.")
@click.option("--price", required=True, help="Price (e.g. 150.00).")
@click.option("--category", default="", help="Category.")
@click.option("--description", default="", help="Description.")
@pass_cli_context
@handles_domain_errors
def literature_add(ctx: CliContext, title: str, price: str, category: str, description: str) -> None:
    """Add a title to the catalog."""
    handler = AddLiteratureHandler(literature_repository(ctx.data_dir))
    lit = handler.handle(ctx.actor, title=title, price=price, category=category, description=description)
    click.echo(f"Literature #{lit.id} '{lit.title}' added at {lit.price}")


@click.command("update")
@click.option("--id", "literature_id", required=True, help="Literature ID.")
@click.option("--price", default=None, help="New price.")
@click.option("--title", default=None, help="New title.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
@pass_cli_context
@handles_domain_errors
def literature_update(ctx: CliContext, literature_id: str, price: str | None, title: str | None,
                      category: str | None, description: str | None) -> None:
    """Update a title's price or details."""
    handler = UpdateLiteratureHandler(literature_repository(ctx.data_dir))
    lit = handler.handle(
        ctx.actor, literature_id, price=price, title=title,
        description=description, category=category,
    )
    click.echo(f"Literature #{lit.id} updated (price {lit.price})")


@click.command("deactivate")
@click.option("--id", "literature_id", required=True, help="Literature ID.")
@pass_cli_context
@handles_domain_errors
def literature_deactivate(ctx: CliContext, literature_id: str) -> None:
    """Withdraw a title from the catalog (soft delete)."""
    handler = DeactivateLiteratureHandler(
        literature_repository(ctx.data_dir), order_repository(ctx.data_dir)
    )
    handler.handle(ctx.actor, literature_id)
    click.echo(f"Literature #{literature_id} deactivated.")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option("--search", default=None, help="Substring of title or description.")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive titles.")
@pass_cli_context
def literature_list(ctx: CliContext, category: str | None, search: str | None, show_all: bool) -> None:
    """List the catalog."""
    titles = ListLiteratureHandler(literature_repository(ctx.data_dir)).handle(
        category=category, search=search, include_inactive=show_all
    )
    if not titles:
        click.echo("No literature found.")
        return

    click.echo(f"{'ID':<6} {'Title':<32} {'Category':<16} {'Price':>14}")
    click.echo("-" * 71)
    for lit in titles:
        click.echo(f"{lit.id:<6} {lit.title:<32} {lit.category:<16} {str(lit.price):>14}")
