"""Internal-consumption adjustment (reajuste) tracking."""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Optional

from fnbledger.domain.channels import ChannelConfig, default_channel_config
from fnbledger.domain.entities import DayRecord
from fnbledger.utils.amount_parser import ZERO, channel_value, channels_of, sub_tab

logger = logging.getLogger(__name__)


class AdjustmentTracker:
    """Pull adjustment values out of the restaurant shifts.

    The adjustment is kept apart from internal consumption because it enters
    the shift values and the grand total with internal consumption, and is
    removed again from the grand total without it.
    """

    def __init__(self, config: Optional[ChannelConfig] = None):
        self.config = config or default_channel_config()

    def shift_adjustment(self, record: DayRecord, period_id: str) -> Decimal:
        """Adjustment of one shift: old combined tab plus new CI tab."""
        shift = self.config.shift(period_id)
        period = record.period(period_id)
        if shift is None or not isinstance(period, Mapping):
            return ZERO

        legacy = channel_value(
            channels_of(sub_tab(period, "ciEFaturados")),
            self.config.legacy_adjustment_key(shift),
        )
        itemized = channel_value(
            channels_of(sub_tab(period, "consumoInterno")),
            self.config.adjustment_key(),
        )
        if legacy and itemized:
            logger.debug(
                "%s %s carries an adjustment in both forms (%s, %s); summing",
                record.id,
                period_id,
                legacy,
                itemized,
            )
        return legacy + itemized

    def by_shift(self, record: DayRecord) -> dict[str, Decimal]:
        return {
            shift.period_id: self.shift_adjustment(record, shift.period_id)
            for shift in self.config.shifts
        }

    def day_adjustment(self, record: DayRecord) -> Decimal:
        return sum(self.by_shift(record).values(), ZERO)
