"""CLI commands for the transaction ledger."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from litdist.application.list_transactions import ListTransactionsHandler
from litdist.application.reverse_transaction import ReverseTransactionHandler
from litdist.infrastructure.bootstrap import inventory_ledger, transaction_ledger
from litdist.infrastructure.cli.context import CliContext, handles_domain_errors, pass_cli_context


@click.command("list")
@click.option("--org", "organization_id", default=None, help="Movements on either side of this organization.")
@click.option("--literature", "literature_id", default=None, help="Only this title.")
@click.option("--order", "order_id", default=None, type=int, help="Only movements of this order.")
@click.option("--type", "type_", default=None, help="INCOMING, OUTGOING or ADJUSTMENT.")
@click.option("--from-date", "date_from", default=None, type=click.DateTime(), help="Earliest date.")
@click.option("--to-date", "date_to", default=None, type=click.DateTime(), help="Latest date.")
@pass_cli_context
@handles_domain_errors
def transaction_list(ctx: CliContext, organization_id, literature_id, order_id, type_,
                     date_from, date_to) -> None:
    """List stock movements, newest first."""
    handler = ListTransactionsHandler(transaction_ledger(ctx.data_dir))
    entries = handler.handle(
        ctx.actor,
        organization_id=organization_id,
        literature_id=literature_id,
        order_id=order_id,
        type=type_,
        date_from=_as_utc(date_from),
        date_to=_as_utc(date_to),
    )
    if not entries:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<5} {'Type':<11} {'Org':<6} {'Lit':<6} {'Qty':>6} {'Order':>6}  Notes")
    click.echo("-" * 70)
    for e in entries:
        order = str(e.order_id) if e.order_id is not None else "-"
        click.echo(
            f"{e.id:<5} {e.type:<11} {e.organization_id:<6} {e.literature_id:<6} "
            f"{e.quantity:>+6} {order:>6}  {e.notes or ''}"
        )


@click.command("summary")
@click.option("--org", "organization_id", default=None, help="Only this organization.")
@pass_cli_context
@handles_domain_errors
def transaction_summary(ctx: CliContext, organization_id: str | None) -> None:
    """Movement count and net quantity per type."""
    rows = ListTransactionsHandler(transaction_ledger(ctx.data_dir)).summary(ctx.actor, organization_id)
    for row in rows:
        click.echo(f"{row.type.value:<11} {row.count:>5} {row.quantity:>+8}")


@click.command("reverse")
@click.option("--id", "transaction_id", required=True, type=int, help="Transaction ID.")
@click.option("--notes", default=None, help="Why the adjustment is cancelled.")
@pass_cli_context
@handles_domain_errors
def transaction_reverse(ctx: CliContext, transaction_id: int, notes: str | None) -> None:
    """Cancel a manual adjustment with an offsetting entry."""
    handler = ReverseTransactionHandler(inventory_ledger(ctx.data_dir), transaction_ledger(ctx.data_dir))
    dto = handler.handle(ctx.actor, transaction_id, notes=notes)
    click.echo(f"Transaction #{transaction_id} reversed by #{dto.id} ({dto.quantity:+d}).")


def _as_utc(value: datetime | None) -> datetime | None:
    return value.replace(tzinfo=timezone.utc) if value is not None else None
