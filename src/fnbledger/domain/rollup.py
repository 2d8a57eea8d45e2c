"""Multi-day rollup of day totals."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from fnbledger.domain.aggregator import Aggregator
from fnbledger.domain.entities import (
    Amount,
    DailyBreakdown,
    DashboardTotals,
    DayRecord,
    DayTotals,
    GrandTotals,
    InternalConsumptionTotals,
    RollupReport,
    RollupSummary,
    sum_amounts,
)
from fnbledger.utils.amount_parser import ZERO
from fnbledger.utils.date_parser import month_key


class RollupService:
    """Service for folding day totals into range reports and dashboards."""

    def __init__(self, aggregator: Optional[Aggregator] = None):
        """Initialize rollup service.

        Args:
            aggregator: Aggregator used for each day; a default one when omitted
        """
        self.aggregator = aggregator or Aggregator()

    def rollup(self, records: Iterable[DayRecord]) -> RollupReport:
        """Build the per-day breakdown and the cumulative summary.

        Args:
            records: Day records of the range, in any order

        Returns:
            RollupReport with days sorted by date
        """
        ordered = sorted(records, key=lambda record: record.id)
        day_totals = self.aggregator.aggregate_days(ordered)
        days = tuple(
            self.build_daily_breakdown(record, totals)
            for record, totals in zip(ordered, day_totals)
        )
        return RollupReport(days=days, summary=self.summarize(day_totals))

    def build_daily_breakdown(self, record: DayRecord, totals: DayTotals) -> DailyBreakdown:
        return DailyBreakdown(
            date=record.date,
            period_totals=totals.period_totals(),
            room_service=totals.room_service,
            total_with_internal_consumption=totals.grand_total.with_internal_consumption,
            total_without_internal_consumption=totals.grand_total.without_internal_consumption,
            internal_consumption=totals.internal_consumption.total,
            adjustment=totals.adjustment,
            created_at=record.created_at,
            last_modified_at=record.last_modified_at,
        )

    def summarize(self, day_totals: Sequence[DayTotals]) -> RollupSummary:
        """Accumulate running totals over already aggregated days."""
        period_totals: dict[str, Amount] = {}
        for totals in day_totals:
            for key, amount in totals.period_totals().items():
                period_totals[key] = period_totals.get(key, Amount.zero()) + amount

        return RollupSummary(
            period_totals=period_totals,
            grand_total=GrandTotals(
                with_internal_consumption=sum_amounts(
                    t.grand_total.with_internal_consumption for t in day_totals
                ),
                without_internal_consumption=sum_amounts(
                    t.grand_total.without_internal_consumption for t in day_totals
                ),
            ),
            internal_consumption=InternalConsumptionTotals(
                lunch=sum_amounts(t.internal_consumption.lunch for t in day_totals),
                dinner=sum_amounts(t.internal_consumption.dinner for t in day_totals),
            ),
            adjustment=sum((t.adjustment for t in day_totals), ZERO),
            day_count=len(day_totals),
        )

    def group_records_by_month(self, records: Iterable[DayRecord]) -> dict[str, list[DayRecord]]:
        """Group day records by ``YYYY-MM``."""
        grouped: dict[str, list[DayRecord]] = defaultdict(list)
        for record in records:
            grouped[month_key(record.date)].append(record)
        return dict(grouped)

    def monthly(self, records: Iterable[DayRecord]) -> dict[str, RollupSummary]:
        """Cumulative summary per month, keys in chronological order."""
        grouped = self.group_records_by_month(records)
        return {
            key: self.summarize(self.aggregator.aggregate_days(grouped[key]))
            for key in sorted(grouped)
        }

    def dashboard(self, records: Iterable[DayRecord]) -> DashboardTotals:
        """Totals for the dashboard cards over a range of days."""
        day_totals = self.aggregator.aggregate_days(records)

        generic: dict[str, Amount] = {}
        for totals in day_totals:
            for key, amount in totals.generic.items():
                generic[key] = generic.get(key, Amount.zero()) + amount

        dishes: Decimal = sum((t.late_night.dishes for t in day_totals), ZERO)
        summary = self.summarize(day_totals)
        return DashboardTotals(
            room_service=sum_amounts(t.room_service for t in day_totals),
            room_service_dishes=dishes,
            breakfast=sum_amounts(t.breakfast.total for t in day_totals),
            lunch=sum_amounts(t.lunch for t in day_totals),
            dinner=sum_amounts(t.dinner for t in day_totals),
            generic=generic,
            frigobar=sum_amounts(t.frigobar for t in day_totals),
            events_direct=sum_amounts(t.events.direct for t in day_totals),
            events_hotel=sum_amounts(t.events.hotel for t in day_totals),
            internal_consumption=summary.internal_consumption,
            adjustment=summary.adjustment,
            grand_total=summary.grand_total,
        )
