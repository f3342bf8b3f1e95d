"""Entry point of the ``litdist`` command line.

Global options fall back to environment variables so cron jobs and
shells can configure the tool without flags:

    LITDIST_DATA_DIR   directory holding the JSON data files
    LITDIST_LOG_LEVEL  DEBUG, INFO, WARNING, ...
    LITDIST_USER       acting user id
    LITDIST_ROLE       GROUP, LOCAL_SUBCOMMITTEE, LOCALITY, REGION or ADMIN
    LITDIST_ORG        organization the user acts for
"""

from pathlib import Path

import click

from litdist.domain.exceptions import ValidationError
from litdist.domain.model.actor import Actor, UserRole
from litdist.infrastructure.bootstrap import DEFAULT_DATA_DIR
from litdist.infrastructure.cli.check_commands import checks_low_stock, checks_reminders
from litdist.infrastructure.cli.context import CliContext
from litdist.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_release,
    inventory_reserve,
    inventory_show,
    inventory_transfer,
)
from litdist.infrastructure.cli.literature_commands import (
    literature_add,
    literature_deactivate,
    literature_list,
    literature_update,
)
from litdist.infrastructure.cli.order_commands import (
    order_add_item,
    order_create,
    order_delete,
    order_list,
    order_lock,
    order_remove_item,
    order_show,
    order_stats,
    order_status,
    order_unlock,
    order_update_item,
)
from litdist.infrastructure.cli.organization_commands import (
    org_create,
    org_deactivate,
    org_list,
    org_show,
    org_update,
)
from litdist.infrastructure.cli.transaction_commands import (
    transaction_list,
    transaction_reverse,
    transaction_summary,
)
from litdist.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    show_default=True,
    envvar="LITDIST_DATA_DIR",
    help="Directory holding the JSON data files.",
)
@click.option("--log-level", default="WARNING", show_default=True, envvar="LITDIST_LOG_LEVEL")
@click.option("--user", "user_id", default="admin", show_default=True, envvar="LITDIST_USER")
@click.option("--role", default="ADMIN", show_default=True, envvar="LITDIST_ROLE")
@click.option("--org", "organization_id", default=None, envvar="LITDIST_ORG")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str, user_id: str, role: str,
        organization_id: str | None) -> None:
    """LitDist: literature distribution inventory and orders"""
    configure_logging(log_level)
    try:
        actor = Actor(user_id=user_id, role=UserRole.parse(role), organization_id=organization_id)
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="--role")
    ctx.obj = CliContext(data_dir=data_dir, actor=actor)


@cli.group()
def org() -> None:
    """Manage organizations."""


@cli.group()
def literature() -> None:
    """Manage the literature catalog."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def transaction() -> None:
    """Inspect and correct stock movements."""


@cli.group()
def checks() -> None:
    """Scheduled notification checks."""


# Register subcommands
org.add_command(org_create)
org.add_command(org_deactivate)
org.add_command(org_list)
org.add_command(org_show)
org.add_command(org_update)
literature.add_command(literature_add)
literature.add_command(literature_deactivate)
literature.add_command(literature_list)
literature.add_command(literature_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_release)
inventory.add_command(inventory_reserve)
inventory.add_command(inventory_show)
inventory.add_command(inventory_transfer)
order.add_command(order_add_item)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_lock)
order.add_command(order_remove_item)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
order.add_command(order_unlock)
order.add_command(order_update_item)
transaction.add_command(transaction_list)
transaction.add_command(transaction_reverse)
transaction.add_command(transaction_summary)
checks.add_command(checks_low_stock)
checks.add_command(checks_reminders)
