"""Shared CLI output formatting."""

from typing import Optional, Sequence

import click

from expensetrack.domain.entities import Business, Transaction


def format_amount(amount: float) -> str:
    return f"${amount:,.2f}"


def echo_transactions(
    transactions: Sequence[Transaction],
    businesses: Optional[Sequence[Business]] = None,
) -> None:
    """Print transactions as a compact table."""
    names = {b.id: b.name for b in businesses or ()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 120)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Category':<16} {'Business':<18} "
        f"{'Card Member':<18} {'Description':<30}"
    )
    click.echo("-" * 120)

    for txn in transactions:
        business = names.get(txn.business_id, txn.business_id or "")
        description = (txn.description or "")[:30]
        click.echo(
            f"{txn.id:<6} {txn.date or '':<12} {format_amount(txn.amount):>12}  "
            f"{txn.category[:16]:<16} {business[:18]:<18} {(txn.card_member or '')[:18]:<18} "
            f"{description:<30}"
        )
