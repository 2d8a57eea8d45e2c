"""Day-level aggregation of decomposed periods."""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from fnbledger.domain.adjustment import AdjustmentTracker
from fnbledger.domain.channels import ChannelConfig, default_channel_config
from fnbledger.domain.decomposer import PeriodDecomposer
from fnbledger.domain.entities import (
    Amount,
    DayRecord,
    DayTotals,
    GrandTotals,
    InternalConsumptionTotals,
    ShiftComponents,
    UnitPriceConfig,
    sum_amounts,
)
from fnbledger.utils.amount_parser import ZERO

logger = logging.getLogger(__name__)


def shift_total(components: ShiftComponents, adjustment: Decimal) -> Amount:
    """Total of one shift.

    Table service, guest folio, delivery, billed and frigobar; the value also
    carries the shift's adjustment. Room service is reported on its own.
    """
    return (components.restaurant + components.billed + components.frigobar).plus_value(adjustment)


class Aggregator:
    """Assemble per-day totals from the decomposer and adjustment tracker."""

    def __init__(
        self,
        config: Optional[ChannelConfig] = None,
        unit_prices: Optional[UnitPriceConfig] = None,
    ):
        """Initialize the aggregator.

        Args:
            config: Channel layout; the production layout when omitted
            unit_prices: Prices for the breakfast control lines
        """
        self.config = config or default_channel_config()
        self.unit_prices = unit_prices or UnitPriceConfig()
        self.decomposer = PeriodDecomposer(self.config)
        self.adjustments = AdjustmentTracker(self.config)

    def aggregate_day(self, record: DayRecord) -> DayTotals:
        """Build every named total for one day record.

        Args:
            record: Day record

        Returns:
            DayTotals for the day
        """
        late_night = self.decomposer.decompose_late_night(record)
        components = {
            shift.period_id: self.decomposer.decompose_shift(record, shift.period_id)
            for shift in self.config.shifts
        }
        adjustment_by_shift = self.adjustments.by_shift(record)
        shifts = {
            period_id: shift_total(parts, adjustment_by_shift[period_id])
            for period_id, parts in components.items()
        }

        room_service = late_night.room_service + sum_amounts(
            parts.room_service for parts in components.values()
        )
        lunch = self._meal_total("lunch", components, shifts)
        dinner = self._meal_total("dinner", components, shifts)
        lunch_adjustment = self._meal_adjustment("lunch", adjustment_by_shift)
        dinner_adjustment = self._meal_adjustment("dinner", adjustment_by_shift)

        breakfast = self.decomposer.decompose_breakfast(record)
        generic = {
            period_id: self.decomposer.decompose_flat(record, period_id)
            for period_id in self.config.flat_periods
        }
        frigobar = sum_amounts(parts.frigobar for parts in components.values())
        events = self.decomposer.decompose_events(record)

        internal_consumption = InternalConsumptionTotals(
            lunch=self._meal_internal_consumption("lunch", components),
            dinner=self._meal_internal_consumption("dinner", components),
        )
        adjustment = lunch_adjustment + dinner_adjustment

        # Lunch and dinner carry their adjustment; it enters the grand total once, below
        categories = (
            room_service
            + breakfast.total
            + sum_amounts(generic.values())
            + lunch.plus_value(-lunch_adjustment)
            + dinner.plus_value(-dinner_adjustment)
            + frigobar
            + events.total
        )
        with_internal_consumption = (categories + internal_consumption.total).plus_value(adjustment)
        without_internal_consumption = (
            with_internal_consumption - internal_consumption.total
        ).plus_value(-adjustment)

        logger.debug(
            "Aggregated %s: with CI=%s without CI=%s",
            record.id,
            with_internal_consumption,
            without_internal_consumption,
        )

        return DayTotals(
            day_id=record.id,
            late_night=late_night,
            room_service=room_service,
            shift_components=components,
            shifts=shifts,
            lunch=lunch,
            dinner=dinner,
            breakfast=breakfast,
            generic=generic,
            frigobar=frigobar,
            events=events,
            internal_consumption=internal_consumption,
            adjustment=adjustment,
            adjustment_by_shift=adjustment_by_shift,
            grand_total=GrandTotals(
                with_internal_consumption=with_internal_consumption,
                without_internal_consumption=without_internal_consumption,
            ),
            breakfast_control=self.decomposer.decompose_breakfast_control(record, self.unit_prices),
            no_show=self.decomposer.decompose_no_show(record, self.unit_prices),
        )

    def aggregate_days(self, records: Iterable[DayRecord]) -> list[DayTotals]:
        return [self.aggregate_day(record) for record in records]

    def _meal_total(
        self,
        meal: str,
        components: dict[str, ShiftComponents],
        shifts: dict[str, Amount],
    ) -> Amount:
        """Combined meal total for display; frigobar is reported separately."""
        return sum_amounts(
            shifts[shift.period_id] - components[shift.period_id].frigobar
            for shift in self.config.shifts_for_meal(meal)
        )

    def _meal_adjustment(self, meal: str, adjustment_by_shift: dict[str, Decimal]) -> Decimal:
        return sum(
            (adjustment_by_shift[shift.period_id] for shift in self.config.shifts_for_meal(meal)),
            ZERO,
        )

    def _meal_internal_consumption(
        self, meal: str, components: dict[str, ShiftComponents]
    ) -> Amount:
        return sum_amounts(
            components[shift.period_id].internal_consumption
            for shift in self.config.shifts_for_meal(meal)
        )
