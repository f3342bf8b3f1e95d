"""CLI commands for organizations."""

from __future__ import annotations

import click

from litdist.application.create_organization import CreateOrganizationHandler
from litdist.application.deactivate_organization import DeactivateOrganizationHandler
from litdist.application.show_organization_tree import ShowOrganizationTreeHandler
from litdist.application.update_organization import UpdateOrganizationHandler
from litdist.infrastructure.bootstrap import organization_repository
from litdist.infrastructure.cli.context import CliContext, handles_domain_errors, pass_cli_context


@click.command("create")
@click.option("--name", required=True, help="Organization name.")
@click.option("--type", "org_type", required=True, help="GROUP, LOCAL_SUBCOMMITTEE, LOCALITY or REGION.")
@click.option("--parent", "parent_id", default=None, help="Parent organization ID.")
@click.option("--contact", default=None, help="Contact person.")
@click.option("--email", default=None, help="Contact e-mail.")
@pass_cli_context
@handles_domain_errors
def org_create(ctx: CliContext, name: str, org_type: str, parent_id: str | None,
               contact: str | None, email: str | None) -> None:
    """Create an organization."""
    handler = CreateOrganizationHandler(organization_repository(ctx.data_dir))
    org = handler.handle(
        ctx.actor, name=name, type=org_type, parent_id=parent_id,
        contact_person=contact, email=email,
    )
    click.echo(f"Organization #{org.id} '{org.name}' ({org.type.value}) created")


@click.command("update")
@click.option("--id", "org_id", required=True, help="Organization ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--parent", "parent_id", default=None, help="New parent organization ID.")
@click.option("--detach", is_flag=True, default=False, help="Remove the parent link.")
@pass_cli_context
@handles_domain_errors
def org_update(ctx: CliContext, org_id: str, name: str | None, parent_id: str | None, detach: bool) -> None:
    """Rename an organization or move it in the hierarchy."""
    handler = UpdateOrganizationHandler(organization_repository(ctx.data_dir))
    kwargs = {}
    if detach:
        kwargs["parent_id"] = None
    elif parent_id is not None:
        kwargs["parent_id"] = parent_id
    org = handler.handle(ctx.actor, org_id, name=name, **kwargs)
    click.echo(f"Organization #{org.id} '{org.name}' updated")


@click.command("deactivate")
@click.option("--id", "org_id", required=True, help="Organization ID.")
@pass_cli_context
@handles_domain_errors
def org_deactivate(ctx: CliContext, org_id: str) -> None:
    """Deactivate an organization (soft delete)."""
    DeactivateOrganizationHandler(organization_repository(ctx.data_dir)).handle(ctx.actor, org_id)
    click.echo(f"Organization #{org_id} deactivated.")


@click.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive organizations.")
@pass_cli_context
def org_list(ctx: CliContext, show_all: bool) -> None:
    """List organizations."""
    orgs = [o for o in organization_repository(ctx.data_dir).list_all() if show_all or o.is_active]
    if not orgs:
        click.echo("No organizations found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Type':<20} {'Parent':<8}")
    click.echo("-" * 64)
    for o in orgs:
        click.echo(f"{o.id:<6} {o.name:<28} {o.type.value:<20} {o.parent_id or '-':<8}")


@click.command("show")
@click.option("--id", "org_id", required=True, help="Organization ID.")
@pass_cli_context
@handles_domain_errors
def org_show(ctx: CliContext, org_id: str) -> None:
    """Show an organization with its parents and children."""
    dto = ShowOrganizationTreeHandler(organization_repository(ctx.data_dir)).handle(org_id)
    org = dto.organization
    status = "active" if org.is_active else "inactive"
    click.echo(f"#{org.id} {org.name} ({org.type.value}, {status})")
    path = " > ".join(a.name for a in reversed(dto.ancestors))
    click.echo(f"Parents:  {path or '-'}")
    click.echo(f"Children: {', '.join(c.name for c in dto.children) or '-'}")
