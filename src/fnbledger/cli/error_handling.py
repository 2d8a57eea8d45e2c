"""CLI error handling helpers."""

import click

from fnbledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_row_errors(errors: list[str]) -> None:
    """List rejected rows of an import on stderr."""
    if not errors:
        return
    click.echo(f"  Errors: {len(errors)}")
    for error in errors:
        click.echo(f"    {error}", err=True)
