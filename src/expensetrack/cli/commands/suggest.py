"""Category suggestion commands."""

import asyncio

import click

from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.domain.errors import DomainError
from expensetrack.domain.suggestion import CATEGORY_CHOICES


@click.command("suggest")
@click.argument("description")
@click.argument("amount", type=float)
@click.pass_context
def suggest(ctx, description: str, amount: float):
    """Suggest a category for a transaction description and amount.

    Negative amounts are income. Use -- before a negative amount, e.g.
    expensetrack suggest "Client payment" -- -250
    """
    service = ctx.obj["suggestion_service"]

    try:
        suggestions = asyncio.run(service.get_suggestions(description, amount))
    except DomainError as e:
        handle_domain_error(ctx, e)

    for suggestion in suggestions:
        click.echo(f"{suggestion.category} (confidence {suggestion.confidence:.0%})")


@click.command("categories")
def list_categories():
    """List the common transaction categories."""
    for category in CATEGORY_CHOICES:
        click.echo(category)


def register_commands(cli):
    """Register suggestion commands with main CLI."""
    cli.add_command(suggest)
    cli.add_command(list_categories)
