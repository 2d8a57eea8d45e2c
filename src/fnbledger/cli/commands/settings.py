"""Unit price settings commands."""

import click
from fnbledger.cli.formatting import format_money
from fnbledger.utils.amount_parser import parse_amount


@click.command("set-price")
@click.argument("channel")
@click.argument("price")
@click.pass_context
def set_price(ctx, channel: str, price: str):
    """Set the per-person price of a channel (e.g. cdmListaHospedes 45.00)."""
    db = ctx.obj["db"]

    try:
        value = parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    if value < 0:
        click.echo("Error: Price must not be negative.", err=True)
        ctx.exit(1)
        return

    db.set_unit_price(channel, value)
    click.echo(f"Price of '{channel}' set to {format_money(value)}")


@click.command("prices")
@click.pass_context
def list_prices(ctx):
    """List configured unit prices."""
    db = ctx.obj["db"]
    prices = db.get_unit_price_config().prices

    if not prices:
        click.echo("No prices configured.")
        return

    for channel in sorted(prices):
        click.echo(f"{channel:<30} {format_money(prices[channel]):>20}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(set_price)
    cli.add_command(list_prices)
