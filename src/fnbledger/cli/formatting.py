"""Plain-text rendering of engine results."""

from collections.abc import Mapping
from decimal import Decimal

import click

from fnbledger.domain.channels import ChannelConfig
from fnbledger.domain.entities import Amount

LINE_WIDTH = 72


def format_money(value: Decimal) -> str:
    return f"R$ {value:,.2f}"


def format_quantity(quantity: Decimal) -> str:
    # Quantities are whole counts in practice; keep decimals only when present
    if quantity == quantity.to_integral_value():
        return f"{int(quantity):,}"
    return f"{quantity:,.2f}"


def echo_header(title: str, first_column: str = "Period") -> None:
    click.echo(f"\n{title}")
    click.echo("-" * LINE_WIDTH)
    click.echo(f"{first_column:<36} {'Qty':>12} {'Value':>22}")
    click.echo("-" * LINE_WIDTH)


def echo_amount(label: str, amount: Amount) -> None:
    click.echo(
        f"{label:<36} {format_quantity(amount.quantity):>12} {format_money(amount.value):>22}"
    )


def echo_value(label: str, value: Decimal) -> None:
    click.echo(f"{label:<36} {'':>12} {format_money(value):>22}")


def echo_period_totals(config: ChannelConfig, period_totals: Mapping[str, Amount]) -> None:
    """Print non-empty period lines, in the order the report lists them."""
    for period_id, amount in period_totals.items():
        if amount.is_zero:
            continue
        echo_amount(config.label(period_id), amount)
