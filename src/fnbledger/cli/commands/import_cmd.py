"""JSON import commands."""

import click
from fnbledger.cli.error_handling import echo_row_errors, handle_domain_error
from fnbledger.domain.errors import DomainError
from fnbledger.domain.loader import ImportService


@click.command("import-days")
@click.argument("json_file", type=click.Path(exists=True))
@click.pass_context
def import_days(ctx, json_file: str):
    """Import daily entries from a JSON export."""
    db = ctx.obj["db"]
    service = ImportService(db)

    try:
        result = service.import_day_records(json_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} days")
    click.echo(f"  Updated: {result['updated']} days")
    echo_row_errors(result["errors"])


@click.command("import-reversals")
@click.argument("json_file", type=click.Path(exists=True))
@click.pass_context
def import_reversals(ctx, json_file: str):
    """Import reversals (estornos) from a JSON export."""
    db = ctx.obj["db"]
    service = ImportService(db)

    try:
        result = service.import_reversals(json_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} reversals")
    echo_row_errors(result["errors"])


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_days)
    cli.add_command(import_reversals)
