"""Category and business assignment commands."""

import asyncio

import click

from expensetrack.cli.csv_loading import load_csv, resolve_business, session_options
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import echo_transactions
from expensetrack.domain.business import BusinessService
from expensetrack.domain.entities import RecategorizationProposal
from expensetrack.domain.errors import DomainError
from expensetrack.domain.recategorize import RecategorizationService
from expensetrack.domain.transaction import TransactionService


@click.command("categorize")
@click.argument("csv_file", type=click.Path(dir_okay=False))
@click.argument("transaction_id", type=int)
@click.argument("category")
@click.option(
    "--apply-similar/--skip-similar",
    default=None,
    help="Answer the similar-transactions prompt up front",
)
@session_options
@click.pass_context
def categorize_transaction(
    ctx,
    csv_file: str,
    transaction_id: int,
    category: str,
    apply_similar: bool | None,
    new_businesses,
    assignments,
):
    """Set a transaction's category.

    When the suggester disagrees with CATEGORY, transactions with a matching
    description are offered for the same category.

    Common categories: Uncategorized, Finance, Freelance, Advertising,
    Payment, Hosting, Other.
    """
    load_csv(ctx, csv_file, new_businesses, assignments)
    store = ctx.obj["store"]
    service = RecategorizationService(store, ctx.obj["suggestion_service"])

    def confirm(proposal: RecategorizationProposal) -> bool:
        count = len(proposal.candidate_ids)
        click.echo(
            f"Suggested category is '{proposal.suggested_category}'. "
            f"{count} similar transaction(s) could also be set to '{proposal.category}'."
        )
        if apply_similar is not None:
            return apply_similar
        return click.confirm(
            f"Update {count} similar transaction(s) to \"{proposal.category}\"?",
            default=False,
        )

    try:
        outcome = asyncio.run(service.edit_category(transaction_id, category, confirm=confirm))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction {transaction_id} categorized as '{category}'")
    if outcome.applied:
        click.echo(f"Updated {outcome.applied} similar transaction(s)")

    echo_transactions(store.list_transactions(), BusinessService(store).list_businesses())


@click.command("assign")
@click.argument("csv_file", type=click.Path(dir_okay=False))
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.option(
    "--business", default="default", show_default=True, help="Business ID or name"
)
@session_options
@click.pass_context
def assign_business(
    ctx,
    csv_file: str,
    transaction_ids: tuple[int, ...],
    business: str,
    new_businesses,
    assignments,
):
    """Assign one or more transactions to a business and show the result.

    Use --add-business to create the business first, e.g.
    expensetrack assign f.csv 0 1 --add-business Consulting --business Consulting
    """
    load_csv(ctx, csv_file, new_businesses, assignments)
    store = ctx.obj["store"]
    service = TransactionService(store)
    business_id = resolve_business(store, business)

    errors = []
    for txn_id in dict.fromkeys(transaction_ids):
        try:
            service.assign_business(txn_id, business_id)
            click.echo(f"✓ Transaction {txn_id} assigned to '{business_id}'")
        except DomainError as e:
            errors.append((txn_id, str(e)))
            click.echo(f"✗ Transaction {txn_id}: {e}")

    if errors:
        ctx.exit(1)

    echo_transactions(store.list_transactions(), BusinessService(store).list_businesses())


def register_commands(cli):
    """Register categorize and assign commands with main CLI."""
    cli.add_command(categorize_transaction)
    cli.add_command(assign_business)
