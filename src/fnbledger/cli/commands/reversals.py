"""Reversal (estorno) report and relaunch commands."""

import click
from fnbledger.cli.date_filters import (
    collect_period_flags,
    date_range_options,
    resolve_cli_date_range,
)
from fnbledger.cli.error_handling import handle_domain_error
from fnbledger.cli.formatting import LINE_WIDTH, echo_amount, echo_header, echo_value, format_money
from fnbledger.domain.entities import ReversalReason
from fnbledger.domain.errors import DomainError, ValidationError, unknown_reason
from fnbledger.domain.relaunch import RelaunchService
from fnbledger.domain.reversals import (
    ReversalReconciler,
    sort_by_date,
)
from fnbledger.utils.date_parser import get_date_range


@click.command("reversals")
@date_range_options
@click.option("--category", help="Only reversals of this category (e.g. 'restaurante')")
@click.option(
    "--reason",
    help="Only reversals with this reason ("
    + ", ".join(reason.value for reason in ReversalReason)
    + ")",
)
@click.option("--list", "show_list", is_flag=True, help="List the reversals left after matching")
@click.pass_context
def reversals(
    ctx,
    start_date: str,
    end_date: str,
    category: str,
    reason: str,
    show_list: bool,
    **period_options,
):
    """Reconcile reversals over a date range (defaults to this month)."""
    db = ctx.obj["db"]

    if reason and reason != "all" and ReversalReason.parse(reason) is None:
        handle_domain_error(ctx, ValidationError(unknown_reason(reason)))
        return

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_options),
        default_range=get_date_range("this-month"),
    )

    records = db.fetch_reversals(category=category, start_date=start, end_date=end)
    if not records:
        click.echo("No reversals found.")
        return

    result = ReversalReconciler().reconcile(sort_by_date(records), reason=reason)

    if show_list:
        click.echo(f"\nFound {len(result.active)} reversal(s):")
        click.echo("-" * LINE_WIDTH)
        click.echo(f"{'Date':<12} {'Room':<8} {'Invoice':<10} {'Reason':<24} {'Value':>14}")
        click.echo("-" * LINE_WIDTH)
        for record in result.active:
            click.echo(
                f"{record.date:<12} {record.room or '-':<8} {record.invoice or '-':<10} "
                f"{record.reason_label:<24} {format_money(record.reversal_value):>14}"
            )

    echo_header("Reversals", first_column="Group")
    echo_amount("Relaunches (credit)", result.credit)
    echo_amount("Debits", result.debit)
    echo_amount("Control", result.control)
    click.echo("-" * LINE_WIDTH)
    for label, amount in sorted(result.by_reason.items()):
        echo_amount(label, amount)
    click.echo("-" * LINE_WIDTH)
    echo_value("Invoice value", result.invoice_value)
    echo_value("Balance", result.balance)
    echo_value("Difference", result.difference)

    if result.neutralized_ids:
        neutralized = sorted(result.neutralized_ids)
        click.echo(f"\nNeutralized pairs: {len(neutralized) // 2} ({', '.join(neutralized)})")


@click.command("relaunch")
@click.argument("reversal_id")
@click.option("--observation", help="Note stored on the relaunch")
@click.option("--registered-by", help="Who registered the relaunch (defaults to 'sistema')")
@click.pass_context
def relaunch(ctx, reversal_id: str, observation: str, registered_by: str):
    """Re-post the charge taken off by reversal REVERSAL_ID, dated today."""
    service = RelaunchService(ctx.obj["db"])

    try:
        credit = service.relaunch(
            reversal_id, observation=observation, registered_by=registered_by
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Relaunched {reversal_id} as {credit.id} on {credit.date}: "
        f"{format_money(credit.reversal_value)}"
    )


def register_commands(cli):
    """Register reversal commands with main CLI."""
    cli.add_command(reversals)
    cli.add_command(relaunch)
