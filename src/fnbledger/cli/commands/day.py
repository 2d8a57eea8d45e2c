"""Single-day report command."""

import click
from fnbledger.cli.error_handling import handle_domain_error
from fnbledger.cli.formatting import (
    LINE_WIDTH,
    echo_amount,
    echo_header,
    echo_period_totals,
    echo_value,
)
from fnbledger.domain.aggregator import Aggregator
from fnbledger.domain.entities import BilledItemType
from fnbledger.domain.errors import NotFoundError, day_record_not_found
from fnbledger.utils.date_parser import parse_date


@click.command("day")
@click.argument("date_str", metavar="DATE")
@click.option("--shifts", is_flag=True, help="Break each restaurant shift into its channels")
@click.pass_context
def show_day(ctx, date_str: str, shifts: bool):
    """Show every total of one day."""
    db = ctx.obj["db"]

    try:
        day = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)
        return

    record = db.get_day_record(day.isoformat())
    if record is None:
        handle_domain_error(ctx, NotFoundError(day_record_not_found(day.isoformat())))
        return

    aggregator = Aggregator(unit_prices=db.get_unit_price_config())
    totals = aggregator.aggregate_day(record)
    config = aggregator.config

    echo_header(f"Day {record.id}")
    echo_period_totals(config, totals.period_totals())
    click.echo("-" * LINE_WIDTH)
    echo_amount("Lunch", totals.lunch)
    echo_amount("Dinner", totals.dinner)
    echo_amount("Internal consumption (lunch)", totals.internal_consumption.lunch)
    echo_amount("Internal consumption (dinner)", totals.internal_consumption.dinner)
    echo_value("Adjustment", totals.adjustment)
    click.echo("-" * LINE_WIDTH)
    echo_amount("Total with internal consumption", totals.grand_total.with_internal_consumption)
    echo_amount(
        "Total without internal consumption", totals.grand_total.without_internal_consumption
    )

    if not totals.breakfast_control.is_zero or not totals.no_show.is_zero:
        echo_header("Breakfast control", first_column="Line")
        echo_amount("Guests served", totals.breakfast_control)
        echo_amount("No-show", totals.no_show)

    if shifts:
        for period_id, parts in totals.shift_components.items():
            echo_header(config.label(period_id), first_column="Channel")
            echo_amount("Room service", parts.room_service)
            echo_amount("Guest folio", parts.guest_folio)
            echo_amount("Table service", parts.table_service)
            for tender, amount in parts.tender_breakdown.items():
                echo_amount(f"  {tender}", amount)
            echo_amount("Delivery", parts.delivery)
            echo_amount("Billed to account", parts.billed)
            for item_type in BilledItemType:
                amount = parts.billed_by_type.get(item_type)
                if amount is not None and not amount.is_zero:
                    echo_amount(f"  {item_type.value}", amount)
            echo_amount("Internal consumption", parts.internal_consumption)
            echo_value("Adjustment", totals.adjustment_by_shift[period_id])
            echo_amount("Frigobar", parts.frigobar)

    if record.observations:
        click.echo(f"\nObservations: {record.observations}")


def register_commands(cli):
    """Register day command with main CLI."""
    cli.add_command(show_day)
