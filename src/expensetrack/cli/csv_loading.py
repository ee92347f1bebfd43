"""CLI helpers for loading a CSV file into the session store."""

from __future__ import annotations

from typing import Sequence

import click

from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.domain.business import BusinessService
from expensetrack.domain.csv_import import CSVImportService
from expensetrack.domain.entities import ALL_BUSINESSES, ImportResult
from expensetrack.domain.errors import DomainError
from expensetrack.domain.transaction import TransactionService
from expensetrack.store.base import TransactionStore


def _parse_assignments(ctx, param, values: tuple[str, ...]) -> tuple[tuple[int, str], ...]:
    """Split ``ID=BUSINESS`` option values into (transaction ID, business) pairs."""
    pairs = []
    for value in values:
        txn_id, sep, business = value.partition("=")
        if not sep or not business.strip():
            raise click.BadParameter(f"'{value}' is not of the form ID=BUSINESS")
        try:
            pairs.append((int(txn_id), business.strip()))
        except ValueError:
            raise click.BadParameter(f"'{txn_id}' is not a transaction ID")
    return tuple(pairs)


def session_options(f):
    """Add the options that set up businesses after the CSV is imported.

    The store only lives for one invocation, so businesses and assignments
    are given alongside the command that uses them.
    """
    f = click.option(
        "--assign",
        "assignments",
        multiple=True,
        metavar="ID=BUSINESS",
        callback=_parse_assignments,
        help="Assign a transaction to a business ID or name (repeatable)",
    )(f)
    f = click.option(
        "--add-business",
        "new_businesses",
        multiple=True,
        metavar="NAME",
        help="Add a business before assignments are made (repeatable)",
    )(f)
    return f


def resolve_business(store: TransactionStore, business: str) -> str:
    """Resolve a business name or ID to its ID.

    IDs win over names. Unknown values are returned unchanged, so filters
    on them match nothing and assignments to them fail as not found.
    """
    if business == ALL_BUSINESSES or store.get_business(business) is not None:
        return business
    for candidate in store.list_businesses():
        if candidate.name == business:
            return candidate.id
    return business


def load_csv(
    ctx: click.Context,
    csv_file: str,
    new_businesses: Sequence[str] = (),
    assignments: Sequence[tuple[int, str]] = (),
) -> ImportResult:
    """Import csv_file into the context's store and apply business setup.

    Exits with an error if the import, a new business or an assignment fails.
    """
    store = ctx.obj["store"]
    try:
        result = CSVImportService(store).import_file(csv_file)

        business_service = BusinessService(store)
        for name in new_businesses:
            business = business_service.add_business(name)
            click.echo(f"Added new business: {business.name} (ID: {business.id})")

        transaction_service = TransactionService(store)
        for txn_id, business in assignments:
            business_id = resolve_business(store, business)
            transaction_service.assign_business(txn_id, business_id)
            click.echo(f"✓ Transaction {txn_id} assigned to '{business_id}'")
    except DomainError as e:
        handle_domain_error(ctx, e)

    return result
