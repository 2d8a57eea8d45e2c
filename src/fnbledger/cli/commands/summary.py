"""Range summary commands."""

import click
from fnbledger.cli.date_filters import (
    collect_period_flags,
    date_range_options,
    resolve_cli_date_range,
)
from fnbledger.cli.formatting import (
    LINE_WIDTH,
    echo_amount,
    echo_header,
    echo_period_totals,
    echo_value,
    format_money,
    format_quantity,
)
from fnbledger.domain.aggregator import Aggregator
from fnbledger.domain.rollup import RollupService
from fnbledger.utils.date_parser import get_date_range


@click.command("summary")
@date_range_options
@click.option("--daily", is_flag=True, help="Show the per-day breakdown before the totals")
@click.option("--monthly", is_flag=True, help="Show one line per month")
@click.pass_context
def summary(ctx, start_date: str, end_date: str, daily: bool, monthly: bool, **period_options):
    """Show totals per period over a date range (defaults to this month)."""
    db = ctx.obj["db"]

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_options),
        default_range=get_date_range("this-month"),
    )

    records = db.fetch_day_records(start_date=start, end_date=end)
    if not records:
        click.echo("No entries found.")
        return

    aggregator = Aggregator(unit_prices=db.get_unit_price_config())
    service = RollupService(aggregator)
    report = service.rollup(records)

    if daily:
        click.echo("\nDaily breakdown:")
        click.echo("-" * LINE_WIDTH)
        click.echo(f"{'Date':<12} {'With CI':>18} {'Without CI':>18} {'CI':>10} {'Adjustment':>10}")
        click.echo("-" * LINE_WIDTH)
        for line in report.days:
            click.echo(
                f"{line.date.isoformat():<12} "
                f"{format_money(line.total_with_internal_consumption.value):>18} "
                f"{format_money(line.total_without_internal_consumption.value):>18} "
                f"{line.internal_consumption.value:>10,.2f} "
                f"{line.adjustment:>10,.2f}"
            )

    if monthly:
        click.echo("\nMonthly evolution:")
        click.echo("-" * LINE_WIDTH)
        for month, month_summary in service.monthly(records).items():
            click.echo(
                f"{month:<12} {month_summary.day_count:>4} days "
                f"{format_money(month_summary.grand_total.with_internal_consumption.value):>22}"
            )

    totals = report.summary
    range_label = f"{report.days[0].date.isoformat()} to {report.days[-1].date.isoformat()}"
    echo_header(f"Summary {range_label} ({totals.day_count} days)")
    echo_period_totals(aggregator.config, totals.period_totals)
    click.echo("-" * LINE_WIDTH)
    echo_amount("Internal consumption (lunch)", totals.internal_consumption.lunch)
    echo_amount("Internal consumption (dinner)", totals.internal_consumption.dinner)
    echo_value("Adjustment", totals.adjustment)
    click.echo("-" * LINE_WIDTH)
    echo_amount("Total with internal consumption", totals.grand_total.with_internal_consumption)
    echo_amount(
        "Total without internal consumption", totals.grand_total.without_internal_consumption
    )


@click.command("dashboard")
@date_range_options
@click.pass_context
def dashboard(ctx, start_date: str, end_date: str, **period_options):
    """Show the dashboard figures over a date range (defaults to this month)."""
    db = ctx.obj["db"]

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_options),
        default_range=get_date_range("this-month"),
    )

    records = db.fetch_day_records(start_date=start, end_date=end)
    if not records:
        click.echo("No entries found.")
        return

    aggregator = Aggregator(unit_prices=db.get_unit_price_config())
    cards = RollupService(aggregator).dashboard(records)

    echo_header("Dashboard", first_column="Card")
    echo_amount("Room service", cards.room_service)
    click.echo(f"{'  dishes':<36} {format_quantity(cards.room_service_dishes):>12}")
    echo_amount("Café da manhã", cards.breakfast)
    echo_amount("Lunch", cards.lunch)
    echo_amount("Dinner", cards.dinner)
    for period_id, amount in cards.generic.items():
        if not amount.is_zero:
            echo_amount(aggregator.config.label(period_id), amount)
    echo_amount("Frigobar", cards.frigobar)
    echo_amount("Events (direct)", cards.events_direct)
    echo_amount("Events (hotel)", cards.events_hotel)
    echo_amount("Internal consumption", cards.internal_consumption.total)
    echo_value("Adjustment", cards.adjustment)
    click.echo("-" * LINE_WIDTH)
    echo_amount("Total with internal consumption", cards.grand_total.with_internal_consumption)
    echo_amount(
        "Total without internal consumption", cards.grand_total.without_internal_consumption
    )


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(dashboard)
