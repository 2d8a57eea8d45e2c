"""Main CLI entry point."""

import logging

import click
from fnbledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from fnbledger.cli.commands import (
    import_cmd,
    settings,
    day,
    summary,
    reversals,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FNBLEDGER_DB_PATH environment variable)",
    envvar="FNBLEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log engine details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Fnbledger - Hotel food and beverage ledger.

    Import daily entry sheets and reversals, then report totals per day,
    per period and for any date range.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
import_cmd.register_commands(cli)
settings.register_commands(cli)
day.register_commands(cli)
summary.register_commands(cli)
reversals.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
