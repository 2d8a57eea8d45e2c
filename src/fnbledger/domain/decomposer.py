"""Period decomposition.

Reduces one meal period of a day record to canonical sub-totals. Two
generations of entry forms wrote the billed-to-account and internal
consumption figures in different places:

- the old form kept aggregated, shift-prefixed channels in a combined
  ``ciEFaturados`` sub-tab;
- the new form keeps itemized lists in ``faturado`` and ``consumoInterno``.

Nothing in a record says which form produced it, and a record may carry both,
so every sub-category with two sources is read from both and summed.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Optional, Union

from fnbledger.domain.channels import (
    BREAKFAST,
    BREAKFAST_CONTROL,
    BREAKFAST_NO_SHOW,
    EVENTS,
    GUEST_LIST_PRICE,
    LATE_NIGHT,
    NO_SHOW_PRICE,
    ChannelConfig,
    ShiftDefinition,
    default_channel_config,
)
from fnbledger.domain.entities import (
    Amount,
    BilledItem,
    BilledItemType,
    BreakfastComponents,
    DayRecord,
    EventComponents,
    InternalConsumptionItem,
    LateNightComponents,
    ShiftComponents,
    UnitPriceConfig,
    sum_amounts,
)
from fnbledger.utils.amount_parser import (
    ZERO,
    channel_quantity,
    channel_value,
    channels_of,
    item_list,
    safe_number,
    sub_tab,
    to_decimal,
)

logger = logging.getLogger(__name__)

RESTAURANT_SUB_TABS = ("hospedes", "clienteMesa", "delivery")
BREAKFAST_HEADCOUNT_FIELDS = ("adultoQtd", "crianca01Qtd", "crianca02Qtd", "contagemManual", "semCheckIn")


@dataclass(frozen=True)
class LegacySource:
    """Figures read from the old aggregated channels."""

    kind: ClassVar[str] = "legacy"
    amount: Amount


@dataclass(frozen=True)
class ItemizedSource:
    """Figures summed from the new itemized lists."""

    kind: ClassVar[str] = "itemized"
    amount: Amount
    item_count: int = 0


Source = Union[LegacySource, ItemizedSource]


def merge_sources(*sources: Source) -> Amount:
    """Sum every source variant present; one never replaces another."""
    return sum_amounts(source.amount for source in sources)


def sum_channels(channels: Mapping[str, Any], channel_ids: Optional[Iterable[str]] = None) -> Amount:
    """Sum ``qtd``/``vtotal`` over the given channels, or over all of them."""
    ids = list(channels.keys()) if channel_ids is None else list(channel_ids)
    return Amount(
        sum((channel_quantity(channels, cid) for cid in ids), ZERO),
        sum((channel_value(channels, cid) for cid in ids), ZERO),
    )


class PeriodDecomposer:
    """Decompose day records into per-period sub-totals."""

    def __init__(self, config: Optional[ChannelConfig] = None):
        """Initialize the decomposer.

        Args:
            config: Channel layout; the production layout when omitted
        """
        self.config = config or default_channel_config()

    # Restaurant shifts

    def decompose_shift(self, record: DayRecord, period_id: str) -> ShiftComponents:
        """Decompose one restaurant shift (first/second lunch, dinner).

        Args:
            record: Day record
            period_id: Shift period id

        Returns:
            ShiftComponents with every sub-category of the shift; all zero when
            the shift is absent or ``period_id`` is not a configured shift
        """
        shift = self.config.shift(period_id)
        period = record.period(period_id)
        if shift is None or not isinstance(period, Mapping):
            return self._empty_shift(period_id)

        table_channels = channels_of(sub_tab(period, "clienteMesa"))
        billed_items = self.billed_items(period)

        components = ShiftComponents(
            period_id=period_id,
            room_service=self.room_service(period, shift),
            guest_folio=sum_channels(channels_of(sub_tab(period, "hospedes"))),
            table_service=sum_channels(table_channels),
            delivery=sum_channels(channels_of(sub_tab(period, "delivery"))),
            billed=merge_sources(*self.billed_sources(period, shift)),
            internal_consumption=merge_sources(*self.internal_consumption_sources(period, shift)),
            frigobar=self.frigobar(period, shift),
            tender_breakdown=self.tender_breakdown(table_channels, shift),
            billed_by_type=self.billed_by_type(billed_items),
        )
        logger.debug(
            "Decomposed %s for %s: billed=%s internal=%s",
            period_id,
            record.id,
            components.billed,
            components.internal_consumption,
        )
        return components

    def room_service(self, period: Mapping[str, Any], shift: ShiftDefinition) -> Amount:
        quantity_key, value_keys = self.config.room_service_keys(shift)
        channels = channels_of(sub_tab(period, "roomService"))
        return Amount(
            channel_quantity(channels, quantity_key),
            sum((channel_value(channels, key) for key in value_keys), ZERO),
        )

    def frigobar(self, period: Mapping[str, Any], shift: ShiftDefinition) -> Amount:
        quantity_key, value_keys = self.config.frigobar_keys(shift)
        channels = channels_of(sub_tab(period, "frigobar"))
        return Amount(
            channel_quantity(channels, quantity_key),
            sum((channel_value(channels, key) for key in value_keys), ZERO),
        )

    def tender_breakdown(
        self, channels: Mapping[str, Any], shift: ShiftDefinition
    ) -> dict[str, Amount]:
        """Group table-service channels by tender type."""
        breakdown: dict[str, Amount] = {}
        for channel_id in channels:
            tender = self.config.tender_of(shift, channel_id)
            amount = sum_channels(channels, [channel_id])
            breakdown[tender] = breakdown.get(tender, Amount.zero()) + amount
        return breakdown

    def billed_items(self, period: Mapping[str, Any]) -> list[BilledItem]:
        items = item_list(sub_tab(period, "faturado"), "faturadoItems")
        return [BilledItem.from_raw(item) for item in items]

    def internal_consumption_items(self, period: Mapping[str, Any]) -> list[InternalConsumptionItem]:
        items = item_list(sub_tab(period, "consumoInterno"), "consumoInternoItems")
        return [InternalConsumptionItem.from_raw(item) for item in items]

    def billed_sources(
        self, period: Mapping[str, Any], shift: ShiftDefinition
    ) -> tuple[ItemizedSource, LegacySource]:
        """Billed-to-account figures from both schema generations."""
        items = self.billed_items(period)
        itemized = ItemizedSource(sum_amounts(item.amount for item in items), len(items))

        legacy_channels = channels_of(sub_tab(period, "ciEFaturados"))
        quantity_key, value_keys = self.config.legacy_billed_keys(shift)
        legacy = LegacySource(
            Amount(
                channel_quantity(legacy_channels, quantity_key),
                sum((channel_value(legacy_channels, key) for key in value_keys), ZERO),
            )
        )
        return itemized, legacy

    def internal_consumption_sources(
        self, period: Mapping[str, Any], shift: ShiftDefinition
    ) -> tuple[ItemizedSource, LegacySource]:
        """Internal consumption figures from both schema generations.

        The old combined tab stored a total that already included the
        adjustment, so the legacy base value is total minus adjustment.
        """
        items = self.internal_consumption_items(period)
        itemized = ItemizedSource(sum_amounts(item.amount for item in items), len(items))

        legacy_channels = channels_of(sub_tab(period, "ciEFaturados"))
        quantity_key, total_key = self.config.legacy_internal_consumption_keys(shift)
        legacy_adjustment = channel_value(legacy_channels, self.config.legacy_adjustment_key(shift))
        legacy = LegacySource(
            Amount(
                channel_quantity(legacy_channels, quantity_key),
                channel_value(legacy_channels, total_key) - legacy_adjustment,
            )
        )
        return itemized, legacy

    def billed_by_type(self, items: Iterable[BilledItem]) -> dict[BilledItemType, Amount]:
        breakdown: dict[BilledItemType, Amount] = {}
        for item in items:
            breakdown[item.type] = breakdown.get(item.type, Amount.zero()) + item.amount
        return breakdown

    def _empty_shift(self, period_id: str) -> ShiftComponents:
        zero = Amount.zero()
        return ShiftComponents(
            period_id=period_id,
            room_service=zero,
            guest_folio=zero,
            table_service=zero,
            delivery=zero,
            billed=zero,
            internal_consumption=zero,
            frigobar=zero,
        )

    # Single-form periods

    def decompose_flat(self, record: DayRecord, period_id: str) -> Amount:
        """Sum every channel of a period that has no sub-tabs."""
        return sum_channels(channels_of(record.period(period_id)))

    def decompose_late_night(self, record: DayRecord) -> LateNightComponents:
        orders_key, dishes_key, value_keys = self.config.late_night_keys()
        channels = channels_of(record.period(LATE_NIGHT))
        return LateNightComponents(
            orders=channel_quantity(channels, orders_key),
            dishes=channel_quantity(channels, dishes_key),
            value=sum((channel_value(channels, key) for key in value_keys), ZERO),
        )

    def decompose_breakfast(self, record: DayRecord) -> BreakfastComponents:
        channels = channels_of(record.period(BREAKFAST))
        return BreakfastComponents(
            guests=sum_channels(channels, self.config.breakfast_guest_channels),
            walk_in=sum_channels(channels, self.config.breakfast_walk_in_channels),
        )

    def decompose_events(self, record: DayRecord) -> EventComponents:
        """Sum sub-events by location; other locations are ignored."""
        direct_location, hotel_location = self.config.event_locations
        direct = Amount.zero()
        hotel = Amount.zero()
        for event in item_list(record.period(EVENTS), "items"):
            for sub_event in item_list(event, "subEvents"):
                amount = Amount(
                    to_decimal(sub_event.get("quantity")),
                    to_decimal(sub_event.get("totalValue")),
                )
                location = sub_event.get("location")
                if location == direct_location:
                    direct = direct + amount
                elif location == hotel_location:
                    hotel = hotel + amount
        return EventComponents(direct=direct, hotel=hotel)

    # Breakfast controls, priced from the settings store

    def decompose_breakfast_control(self, record: DayRecord, prices: UnitPriceConfig) -> Amount:
        """Headcount of the breakfast control sheet times the per-person price."""
        control = record.period(BREAKFAST_CONTROL)
        if not isinstance(control, Mapping):
            return Amount.zero()
        people = sum((safe_number(control, name) for name in BREAKFAST_HEADCOUNT_FIELDS), ZERO)
        return Amount(people, people * prices.price(GUEST_LIST_PRICE))

    def decompose_no_show(self, record: DayRecord, prices: UnitPriceConfig) -> Amount:
        """One no-show per listed item, at the configured no-show price."""
        count = Decimal(len(item_list(record.period(BREAKFAST_NO_SHOW), "items")))
        return Amount(count, count * prices.price(NO_SHOW_PRICE))
