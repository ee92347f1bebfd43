"""CSV import command."""

import click

from expensetrack.cli.csv_loading import load_csv, session_options
from expensetrack.cli.formatting import echo_transactions


@click.command("import")
@click.argument("csv_file", type=click.Path(dir_okay=False))
@click.option("--preview", default=10, show_default=True, help="Number of rows to show (0 for none)")
@session_options
@click.pass_context
def import_csv(ctx, csv_file: str, preview: int, new_businesses, assignments):
    """Import transactions from a card statement CSV file.

    Columns are read by position: date, (skipped), description, card member,
    account number, amount. The first row is treated as a header.
    """
    result = load_csv(ctx, csv_file, new_businesses, assignments)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")

    if preview > 0 and result.transactions:
        echo_transactions(result.transactions[:preview])
        remaining = result.imported - preview
        if remaining > 0:
            click.echo(f"... and {remaining} more")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
