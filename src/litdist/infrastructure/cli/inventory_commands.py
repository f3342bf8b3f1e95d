"""CLI commands for inventory management."""

from __future__ import annotations

import click

from litdist.application.adjust_inventory import AdjustInventoryHandler
from litdist.application.manage_reservations import (
    ReleaseInventoryHandler,
    ReserveInventoryHandler,
)
from litdist.application.show_inventory import ShowInventoryHandler
from litdist.application.transfer_inventory import TransferInventoryHandler
from litdist.infrastructure.bootstrap import (
    inventory_ledger,
    inventory_repository,
    literature_repository,
    organization_repository,
    transaction_ledger,
)
from litdist.infrastructure.cli.context import CliContext, handles_domain_errors, pass_cli_context


@click.command("show")
@click.option("--org", "organization_id", default=None, help="Only this organization.")
@click.option("--literature", "literature_id", default=None, help="Only this title.")
@pass_cli_context
def inventory_show(ctx: CliContext, organization_id: str | None, literature_id: str | None) -> None:
    """Show current inventory levels."""
    handler = ShowInventoryHandler(inventory_repository(ctx.data_dir))
    lines = handler.handle(organization_id=organization_id, literature_id=literature_id)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'Org':<8} {'Literature':<12} {'Quantity':>9} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 53)
    for line in lines:
        click.echo(
            f"{line.organization_id:<8} {line.literature_id:<12} {line.quantity:>9} "
            f"{line.reserved:>10} {line.available:>10}"
        )


@click.command("adjust")
@click.option("--org", "organization_id", required=True, help="Organization ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--delta", required=True, type=int, help="Signed change of on-hand stock.")
@click.option("--reason", required=True, help="Why the count changed.")
@click.option("--notes", default=None, help="Free text.")
@pass_cli_context
@handles_domain_errors
def inventory_adjust(ctx: CliContext, organization_id: str, literature_id: str, delta: int,
                     reason: str, notes: str | None) -> None:
    """Correct on-hand stock (physical count)."""
    handler = AdjustInventoryHandler(
        organization_repository(ctx.data_dir),
        literature_repository(ctx.data_dir),
        inventory_ledger(ctx.data_dir),
        transaction_ledger(ctx.data_dir),
    )
    record = handler.handle(ctx.actor, organization_id, literature_id, delta, reason, notes)
    click.echo(f"Stock of {literature_id} at {organization_id} is now {record.quantity}")


@click.command("transfer")
@click.option("--from", "from_organization_id", required=True, help="Source organization ID.")
@click.option("--to", "to_organization_id", required=True, help="Target organization ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--quantity", required=True, type=int, help="Units to move.")
@click.option("--notes", default=None, help="Free text.")
@pass_cli_context
@handles_domain_errors
def inventory_transfer(ctx: CliContext, from_organization_id: str, to_organization_id: str,
                       literature_id: str, quantity: int, notes: str | None) -> None:
    """Move stock between organizations."""
    handler = TransferInventoryHandler(
        organization_repository(ctx.data_dir),
        literature_repository(ctx.data_dir),
        inventory_ledger(ctx.data_dir),
        transaction_ledger(ctx.data_dir),
    )
    handler.handle(ctx.actor, from_organization_id, to_organization_id, literature_id, quantity, notes)
    click.echo(f"Transferred {quantity} of {literature_id} from {from_organization_id} to {to_organization_id}")


@click.command("reserve")
@click.option("--org", "organization_id", required=True, help="Organization ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--quantity", required=True, type=int, help="Units to hold.")
@pass_cli_context
@handles_domain_errors
def inventory_reserve(ctx: CliContext, organization_id: str, literature_id: str, quantity: int) -> None:
    """Hold stock by hand."""
    record = ReserveInventoryHandler(inventory_ledger(ctx.data_dir)).handle(
        ctx.actor, organization_id, literature_id, quantity
    )
    click.echo(f"Reserved {quantity}; {record.available_quantity} still available")


@click.command("release")
@click.option("--org", "organization_id", required=True, help="Organization ID.")
@click.option("--literature", "literature_id", required=True, help="Literature ID.")
@click.option("--quantity", required=True, type=int, help="Units to free.")
@click.option("--strict", is_flag=True, default=False, help="Fail instead of clamping over-release.")
@pass_cli_context
@handles_domain_errors
def inventory_release(ctx: CliContext, organization_id: str, literature_id: str,
                      quantity: int, strict: bool) -> None:
    """Free reserved stock by hand."""
    released = ReleaseInventoryHandler(inventory_ledger(ctx.data_dir)).handle(
        ctx.actor, organization_id, literature_id, quantity, strict=strict
    )
    click.echo(f"Released {released} of {literature_id} at {organization_id}")
