"""Business management commands."""

import click

from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.domain.business import BusinessService
from expensetrack.domain.errors import DomainError


def print_businesses(service: BusinessService) -> None:
    click.echo("\nBusinesses:")
    for business in service.list_businesses():
        click.echo(f"  {business.name} (ID: {business.id})")


@click.group()
def business_group():
    """Manage businesses."""
    pass


@business_group.command("list")
@click.pass_context
def list_businesses(ctx):
    """List businesses."""
    print_businesses(BusinessService(ctx.obj["store"]))


@business_group.command("add")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def add_business(ctx, names: tuple[str, ...]):
    """Add one or more businesses."""
    service = BusinessService(ctx.obj["store"])

    for name in names:
        try:
            business = service.add_business(name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Added new business: {business.name} (ID: {business.id})")

    print_businesses(service)


@business_group.command("remove")
@click.argument("business_id")
@click.pass_context
def remove_business(ctx, business_id: str):
    """Remove a business; its transactions become unassigned."""
    service = BusinessService(ctx.obj["store"])

    try:
        unassigned = service.remove_business(business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Removed business {business_id} "
        f"({unassigned} transaction{'s' if unassigned != 1 else ''} unassigned)"
    )
    print_businesses(service)


def register_commands(cli):
    """Register business commands with main CLI."""
    cli.add_command(business_group, name="business")
