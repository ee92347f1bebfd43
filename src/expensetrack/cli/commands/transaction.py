"""Transaction listing commands."""

import click

from expensetrack.cli.csv_loading import load_csv, resolve_business, session_options
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import echo_transactions
from expensetrack.domain.business import BusinessService
from expensetrack.domain.entities import ALL_BUSINESSES
from expensetrack.domain.errors import DomainError
from expensetrack.domain.transaction import SORT_KEYS, TransactionService


@click.command("transactions")
@click.argument("csv_file", type=click.Path(dir_okay=False))
@click.option("--search", help="Text to match in description or category")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice(SORT_KEYS),
    default="date",
    show_default=True,
    help="Column to sort by",
)
@click.option("--asc", is_flag=True, help="Sort ascending (default is descending)")
@click.option("--business", default=ALL_BUSINESSES, show_default=True, help="Business ID or name to show")
@session_options
@click.pass_context
def list_transactions(
    ctx, csv_file: str, search: str, sort_key: str, asc: bool, business: str, new_businesses, assignments
):
    """List imported transactions."""
    load_csv(ctx, csv_file, new_businesses, assignments)
    store = ctx.obj["store"]
    service = TransactionService(store)

    try:
        transactions = service.list_transactions(
            search=search,
            sort_key=sort_key,
            descending=not asc,
            business_id=resolve_business(store, business),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    echo_transactions(transactions, BusinessService(store).list_businesses())


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(list_transactions)
