"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from litdist.application.change_order_status import ChangeOrderStatusHandler
from litdist.application.create_order import CreateOrderHandler
from litdist.application.delete_order import DeleteOrderHandler
from litdist.application.dto import OrderDTO, OrderItemSpec
from litdist.application.edit_order_items import (
    AddOrderItemHandler,
    RemoveOrderItemHandler,
    UpdateOrderItemHandler,
)
from litdist.application.lock_order import LockOrderHandler, UnlockOrderHandler
from litdist.application.order_statistics import OrderStatisticsHandler
from litdist.application.show_order import ListOrdersHandler, ShowOrderHandler
from litdist.infrastructure.bootstrap import (
    dispatcher,
    literature_repository,
    order_repository,
    order_state_machine,
    organization_repository,
)
from litdist.infrastructure.cli.context import CliContext, handles_domain_errors, pass_cli_context


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' (literature id : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'LiteratureId:Quantity'."
            )
        literature_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for literature '{literature_id}'."
            )
        specs.append(OrderItemSpec(literature_id=literature_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} (#{dto.id}, status={dto.status})")
    click.echo(f"From: {dto.from_organization_id}  To: {dto.to_organization_id}")
    click.echo(f"Created: {dto.created_at} by {dto.created_by or '-'}")
    if dto.locked_by:
        click.echo(f"Locked by: {dto.locked_by}")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")
    click.echo()
    click.echo(f"  {'Title':<28} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.title:<28} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Order Total':<34} {dto.total:>29}")


@click.command("create")
@click.option("--from", "from_organization_id", required=True, help="Ordering organization ID.")
@click.option("--to", "to_organization_id", required=True, help="Supplier organization ID.")
@click.option("--items", required=True, help="Items as 'LiteratureId:Qty,LiteratureId:Qty'.")
@click.option("--notes", default=None, help="Free text.")
@pass_cli_context
@handles_domain_errors
def order_create(ctx: CliContext, from_organization_id: str, to_organization_id: str,
                 items: str, notes: str | None) -> None:
    """Create a new DRAFT order."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(ctx.data_dir),
        organization_repo=organization_repository(ctx.data_dir),
        literature_repo=literature_repository(ctx.data_dir),
        dispatcher=dispatcher(ctx.data_dir),
    )
    dto = handler.handle(ctx.actor, from_organization_id, to_organization_id, specs, notes)
    click.echo(f"Order {dto.order_number} created (#{dto.id}, status={dto.status})")
    click.echo(f"Total: {dto.total}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@pass_cli_context
@handles_domain_errors
def order_show(ctx: CliContext, order_id: int) -> None:
    """Show order details."""
    _display_order(ShowOrderHandler(order_repository(ctx.data_dir)).handle(order_id))


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status.")
@click.option("--from", "from_organization_id", default=None, help="Only orders placed by this organization.")
@click.option("--to", "to_organization_id", default=None, help="Only orders placed with this supplier.")
@pass_cli_context
@handles_domain_errors
def order_list(ctx: CliContext, status: str | None, from_organization_id: str | None,
               to_organization_id: str | None) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(order_repository(ctx.data_dir)).handle(
        status=status,
        from_organization_id=from_organization_id,
        to_organization_id=to_organization_id,
    )
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<5} {'Number':<18} {'From':<6} {'To':<6} {'Status':<12} {'Total':>16}")
    click.echo("-" * 68)
    for dto in orders:
        click.echo(
            f"{dto.id:<5} {dto.order_number:<18} {dto.from_organization_id:<6} "
            f"{dto.to_organization_id:<6} {dto.status:<12} {dto.total:>16}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "status", required=True, help="Target status, e.g. APPROVED.")
@click.option("--notes", default=None, help="Replace the order notes.")
@pass_cli_context
@handles_domain_errors
def order_status(ctx: CliContext, order_id: int, status: str, notes: str | None) -> None:
    """Move an order to another status."""
    handler = ChangeOrderStatusHandler(order_state_machine(ctx.data_dir))
    dto = handler.handle(ctx.actor, order_id, status, notes=notes)
    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("add-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--quantity", required=True, type=int, help="Quantity.")
@click.option("--price", "unit_price", default=None, help="Override the catalog price.")
@pass_cli_context
@handles_domain_errors
def order_add_item(ctx: CliContext, order_id: int, literature_id: str, quantity: int,
                   unit_price: str | None) -> None:
    """Add a line to an order."""
    handler = AddOrderItemHandler(order_repository(ctx.data_dir), literature_repository(ctx.data_dir))
    dto = handler.handle(ctx.actor, order_id, literature_id, quantity, unit_price=unit_price)
    click.echo(f"Item added. Order total: {dto.total}")


@click.command("update-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
@pass_cli_context
@handles_domain_errors
def order_update_item(ctx: CliContext, order_id: int, literature_id: str, quantity: int) -> None:
    """Change the quantity of a line."""
    dto = UpdateOrderItemHandler(order_repository(ctx.data_dir)).handle(
        ctx.actor, order_id, literature_id, quantity
    )
    click.echo(f"Item updated. Order total: {dto.total}")


@click.command("remove-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@pass_cli_context
@handles_domain_errors
def order_remove_item(ctx: CliContext, order_id: int, literature_id: str) -> None:
    """Remove a line from an order."""
    dto = RemoveOrderItemHandler(order_repository(ctx.data_dir)).handle(
        ctx.actor, order_id, literature_id
    )
    click.echo(f"Item removed. Order total: {dto.total}")


@click.command("lock")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@pass_cli_context
@handles_domain_errors
def order_lock(ctx: CliContext, order_id: int) -> None:
    """Take the editing lock on an order."""
    dto = LockOrderHandler(order_repository(ctx.data_dir)).handle(ctx.actor, order_id)
    click.echo(f"Order {dto.order_number} locked by {dto.locked_by}.")


@click.command("unlock")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@pass_cli_context
@handles_domain_errors
def order_unlock(ctx: CliContext, order_id: int) -> None:
    """Release the editing lock on an order."""
    dto = UnlockOrderHandler(order_repository(ctx.data_dir)).handle(ctx.actor, order_id)
    click.echo(f"Order {dto.order_number} unlocked.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@pass_cli_context
@handles_domain_errors
def order_delete(ctx: CliContext, order_id: int) -> None:
    """Delete a DRAFT order."""
    DeleteOrderHandler(order_repository(ctx.data_dir)).handle(ctx.actor, order_id)
    click.echo(f"Order #{order_id} deleted.")


@click.command("stats")
@click.option("--org", "organization_id", default=None, help="Only orders involving this organization.")
@pass_cli_context
def order_stats(ctx: CliContext, organization_id: str | None) -> None:
    """Order counts and value per status."""
    rows = OrderStatisticsHandler(order_repository(ctx.data_dir)).handle(organization_id)
    if not rows:
        click.echo("No orders found.")
        return

    click.echo(f"{'Status':<12} {'Count':>6} {'Total':>18}")
    click.echo("-" * 38)
    for row in rows:
        click.echo(f"{row.status:<12} {row.count:>6} {row.total_amount:>18}")
