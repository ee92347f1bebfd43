"""Main CLI entry point."""

import click

from expensetrack.logging_setup import LOG_LEVEL_ENV, configure_logging
from expensetrack.store.factories import create_memory_store
from expensetrack.domain.suggestion import LATENCY_ENV, create_suggestion_service

# Import and register all commands at module level
from expensetrack.cli.commands import (
    analytics,
    business,
    categorize,
    import_cmd,
    suggest,
    transaction,
)


@click.group()
@click.option(
    "--log-level",
    help=f"Logging level, e.g. INFO or DEBUG (overrides {LOG_LEVEL_ENV})",
    envvar=LOG_LEVEL_ENV,
)
@click.option(
    "--suggestion-latency",
    type=click.FloatRange(min=0),
    help=f"Seconds the category suggester takes to answer (overrides {LATENCY_ENV})",
    envvar=LATENCY_ENV,
)
@click.pass_context
def cli(ctx, log_level: str | None, suggestion_latency: float | None):
    """ExpenseTrack - categorize card transactions and chart where money goes.

    Each command works on a fresh in-memory store; commands that take a CSV
    file import it first. Use --add-business and --assign on those commands
    to set up businesses for the same run.
    """
    ctx.ensure_object(dict)

    # Set up the session only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        ctx.obj["suggestion_service"] = create_suggestion_service(suggestion_latency)
        ctx.obj["store"] = create_memory_store()
        ctx.call_on_close(ctx.obj["store"].disconnect)


# Register all commands
import_cmd.register_commands(cli)
transaction.register_commands(cli)
categorize.register_commands(cli)
business.register_commands(cli)
analytics.register_commands(cli)
suggest.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
