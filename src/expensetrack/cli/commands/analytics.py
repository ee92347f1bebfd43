"""Analytics command."""

import click

from expensetrack.cli.csv_loading import load_csv, resolve_business, session_options
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.formatting import format_amount
from expensetrack.domain.analytics import AnalyticsService
from expensetrack.domain.entities import ALL_BUSINESSES, Timeframe, TransactionCountScope
from expensetrack.domain.errors import DomainError


def _echo_buckets(title: str, buckets) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 50)
    if not buckets:
        click.echo("  (no data)")
        return
    for bucket in buckets:
        click.echo(f"  {bucket.name:<30} {format_amount(bucket.value):>16}")


@click.command("analytics")
@click.argument("csv_file", type=click.Path(dir_okay=False))
@click.option(
    "--timeframe",
    type=click.Choice([t.value for t in Timeframe]),
    default=Timeframe.MONTH.value,
    show_default=True,
    help="Window ending now",
)
@click.option("--business", default=ALL_BUSINESSES, show_default=True, help="Business ID or name to include")
@click.option(
    "--count-scope",
    type=click.Choice([s.value for s in TransactionCountScope]),
    default=TransactionCountScope.ALL.value,
    show_default=True,
    help="Count every imported transaction, or only those in the window",
)
@session_options
@click.pass_context
def analytics(
    ctx, csv_file: str, timeframe: str, business: str, count_scope: str, new_businesses, assignments
):
    """Show expense distribution, income vs expenses and summary figures."""
    load_csv(ctx, csv_file, new_businesses, assignments)
    store = ctx.obj["store"]
    service = AnalyticsService(store)

    try:
        report = service.build_report(
            timeframe=timeframe,
            business_id=resolve_business(store, business),
            count_scope=count_scope,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transactions since {report.cutoff:%Y-%m-%d %H:%M} (business: {report.business_id})")
    _echo_buckets("Expense Distribution", report.expense_by_category)
    _echo_buckets("Income vs Expenses", report.income_vs_expense)

    largest = report.largest_category
    click.echo("\nSummary")
    click.echo("-" * 50)
    click.echo(f"  Total Expenses: {format_amount(report.total_expenses)}")
    click.echo(f"  Largest Category: {largest.name} ({format_amount(largest.value)})")
    click.echo(f"  Number of Transactions: {report.transaction_count}")


def register_commands(cli):
    """Register analytics command with main CLI."""
    cli.add_command(analytics)
