"""CLI commands for scheduled checks (run them from cron)."""

from __future__ import annotations

import click

from litdist.application.run_scheduled_checks import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    DEFAULT_REMINDER_DAYS,
    CheckLowStockHandler,
    SendOrderRemindersHandler,
)
from litdist.infrastructure.bootstrap import dispatcher, inventory_ledger, order_repository
from litdist.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("reminders")
@click.option(
    "--older-than-days",
    default=DEFAULT_REMINDER_DAYS,
    show_default=True,
    type=click.IntRange(min=0),
    envvar="LITDIST_REMINDER_DAYS",
    help="Remind about open orders older than this.",
)
@pass_cli_context
def checks_reminders(ctx: CliContext, older_than_days: int) -> None:
    """Send reminders for stale open orders."""
    handler = SendOrderRemindersHandler(order_repository(ctx.data_dir), dispatcher(ctx.data_dir))
    report = handler.handle(older_than_days=older_than_days)
    click.echo(f"Reminders: {report.sent} sent, {report.failed} failed")


@click.command("low-stock")
@click.option(
    "--threshold",
    default=DEFAULT_LOW_STOCK_THRESHOLD,
    show_default=True,
    type=click.IntRange(min=0),
    envvar="LITDIST_LOW_STOCK_THRESHOLD",
    help="Alert when available stock is at or below this.",
)
@click.option("--org", "organization_id", default=None, help="Only this organization.")
@pass_cli_context
def checks_low_stock(ctx: CliContext, threshold: int, organization_id: str | None) -> None:
    """Send alerts for titles running low."""
    handler = CheckLowStockHandler(inventory_ledger(ctx.data_dir), dispatcher(ctx.data_dir))
    report = handler.handle(threshold=threshold, organization_id=organization_id)
    click.echo(f"Low stock alerts: {report.sent} sent, {report.failed} failed")
