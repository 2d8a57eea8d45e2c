"""Domain model entities for fnbledger.

These are pure data classes representing business concepts, independent of
the database schema and of the two generations of entry forms that produced
the stored records.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from fnbledger.utils.amount_parser import ZERO, to_decimal
from fnbledger.utils.date_parser import parse_day_id


@dataclass(frozen=True)
class Amount:
    """A quantity and a monetary value, always summed independently."""

    quantity: Decimal = ZERO
    value: Decimal = ZERO

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.quantity + other.quantity, self.value + other.value)

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.quantity - other.quantity, self.value - other.value)

    def plus_value(self, value: Decimal) -> "Amount":
        """Return a copy with ``value`` added to the monetary part only."""
        return Amount(self.quantity, self.value + value)

    @classmethod
    def zero(cls) -> "Amount":
        return cls(ZERO, ZERO)

    @property
    def is_zero(self) -> bool:
        return self.quantity == 0 and self.value == 0


def sum_amounts(amounts: Iterable[Amount]) -> Amount:
    """Sum amounts, starting from zero."""
    total = Amount.zero()
    for amount in amounts:
        total = total + amount
    return total


class BilledItemType(str, Enum):
    """Who a billed-to-account charge was posted to."""

    HOTEL = "hotel"
    STAFF = "funcionario"
    OTHER = "outros"

    @classmethod
    def parse(cls, raw: Any) -> "BilledItemType":
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class BilledItem:
    """One billed-to-account transaction from the itemized entry form."""

    client_name: str
    type: BilledItemType
    quantity: Decimal
    value: Decimal
    observation: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "BilledItem":
        return cls(
            client_name=str(raw.get("clientName") or ""),
            type=BilledItemType.parse(raw.get("type")),
            quantity=to_decimal(raw.get("quantity")),
            value=to_decimal(raw.get("value")),
            observation=raw.get("observation"),
        )

    @property
    def amount(self) -> Amount:
        return Amount(self.quantity, self.value)


@dataclass(frozen=True)
class InternalConsumptionItem:
    """One internal-consumption transaction from the itemized entry form."""

    client_name: str
    quantity: Decimal
    value: Decimal
    observation: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "InternalConsumptionItem":
        return cls(
            client_name=str(raw.get("clientName") or ""),
            quantity=to_decimal(raw.get("quantity")),
            value=to_decimal(raw.get("value")),
            observation=raw.get("observation"),
        )

    @property
    def amount(self) -> Amount:
        return Amount(self.quantity, self.value)


@dataclass(frozen=True)
class DayRecord:
    """One calendar day's complete entry.

    ``periods`` keeps every meal period payload exactly as stored, keyed by
    period id (``madrugada``, ``almocoPrimeiroTurno``, ``eventos``, ...).
    """

    id: str
    periods: Mapping[str, Any] = field(default_factory=dict)
    observations: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None

    @property
    def date(self) -> date:
        return parse_day_id(self.id)

    def period(self, period_id: str) -> Any:
        """Return the raw payload for a period, or None."""
        return self.periods.get(period_id)


class ReversalRole(Enum):
    """How a reversal participates in reconciliation."""

    CREDIT = "credit"
    DEBIT = "debit"
    CONTROL = "control"


class ReversalReason(str, Enum):
    """Reason recorded on a reversal (estorno)."""

    DUPLICATE = "duplicidade"
    POSTING_ERROR = "erro de lancamento"
    DIRECT_PAYMENT = "pagamento direto"
    NOT_CONSUMED = "nao consumido"
    DIVERGENT_SIGNATURE = "assinatura divergente"
    COURTESY = "cortesia"
    RELAUNCH = "relancamento"

    @classmethod
    def parse(cls, raw: Any) -> Optional["ReversalReason"]:
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None

    @property
    def role(self) -> ReversalRole:
        if self is ReversalReason.RELAUNCH:
            return ReversalRole.CREDIT
        if self in (ReversalReason.DIVERGENT_SIGNATURE, ReversalReason.NOT_CONSUMED):
            return ReversalRole.DEBIT
        return ReversalRole.CONTROL


REASON_LABELS: dict[str, str] = {
    ReversalReason.DUPLICATE.value: "Duplicidade",
    ReversalReason.POSTING_ERROR.value: "Erro de Lançamento",
    ReversalReason.DIRECT_PAYMENT.value: "Pagamento Direto",
    ReversalReason.NOT_CONSUMED.value: "Não Consumido",
    ReversalReason.DIVERGENT_SIGNATURE.value: "Assinatura Divergente",
    ReversalReason.COURTESY.value: "Cortesia",
    ReversalReason.RELAUNCH.value: "Relançamento",
}


@dataclass(frozen=True)
class ReversalRecord:
    """One chargeback / correction event.

    ``raw_reason`` keeps the stored reason text; ``reason`` is None when the
    text is not a known reason, which makes the record a control reversal.
    """

    date: str
    reason: Optional[ReversalReason]
    raw_reason: str = ""
    id: Optional[str] = None
    category: str = ""
    room: Optional[str] = None
    invoice: Optional[str] = None
    quantity: Decimal = ZERO
    invoice_value: Decimal = ZERO
    reversal_value: Decimal = ZERO
    observation: Optional[str] = None
    registered_by: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ReversalRecord":
        raw_reason = str(raw.get("reason") or "")
        return cls(
            id=_optional_text(raw.get("id")),
            date=str(raw.get("date") or ""),
            category=str(raw.get("category") or ""),
            room=_optional_text(raw.get("uh")),
            invoice=_optional_text(raw.get("nf")),
            reason=ReversalReason.parse(raw_reason),
            raw_reason=raw_reason,
            quantity=to_decimal(raw.get("quantity")),
            invoice_value=to_decimal(raw.get("valorTotalNota")),
            reversal_value=to_decimal(raw.get("valorEstorno")),
            observation=raw.get("observation"),
            registered_by=raw.get("registeredBy"),
        )

    @property
    def role(self) -> ReversalRole:
        return self.reason.role if self.reason is not None else ReversalRole.CONTROL

    @property
    def reason_label(self) -> str:
        if self.reason is not None:
            return REASON_LABELS[self.reason.value]
        return self.raw_reason or "-"

    @property
    def is_matchable(self) -> bool:
        """Whether the record carries both a room and an invoice number."""
        return bool(self.room) and bool(self.invoice)


def _optional_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


@dataclass(frozen=True)
class UnitPriceConfig:
    """Configured price per person, keyed by channel id."""

    prices: Mapping[str, Decimal] = field(default_factory=dict)

    def price(self, channel_id: str) -> Decimal:
        return self.prices.get(channel_id, ZERO)

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "UnitPriceConfig":
        if not raw:
            return cls()
        return cls({str(key): to_decimal(value) for key, value in raw.items()})


# --- Engine output ---


@dataclass(frozen=True)
class ShiftComponents:
    """Sub-totals of one restaurant shift, both schema generations merged."""

    period_id: str
    room_service: Amount
    guest_folio: Amount
    table_service: Amount
    delivery: Amount
    billed: Amount
    internal_consumption: Amount
    frigobar: Amount
    tender_breakdown: Mapping[str, Amount] = field(default_factory=dict)
    billed_by_type: Mapping[BilledItemType, Amount] = field(default_factory=dict)

    @property
    def restaurant(self) -> Amount:
        """Table service, guest folio and delivery together."""
        return self.table_service + self.guest_folio + self.delivery


@dataclass(frozen=True)
class LateNightComponents:
    """Room service taken during the late-night period."""

    orders: Decimal
    dishes: Decimal
    value: Decimal

    @property
    def room_service(self) -> Amount:
        return Amount(self.orders, self.value)


@dataclass(frozen=True)
class BreakfastComponents:
    """Café-da-manhã lines: hotel guests and walk-in sales."""

    guests: Amount
    walk_in: Amount

    @property
    def total(self) -> Amount:
        return self.guests + self.walk_in


@dataclass(frozen=True)
class EventComponents:
    """Event sales split by where they were charged."""

    direct: Amount
    hotel: Amount

    @property
    def total(self) -> Amount:
        return self.direct + self.hotel


@dataclass(frozen=True)
class InternalConsumptionTotals:
    """Internal consumption grouped by meal."""

    lunch: Amount
    dinner: Amount

    @property
    def total(self) -> Amount:
        return self.lunch + self.dinner


@dataclass(frozen=True)
class GrandTotals:
    """Day or range totals with and without internal consumption."""

    with_internal_consumption: Amount
    without_internal_consumption: Amount


@dataclass(frozen=True)
class DayTotals:
    """Every aggregate the reports and dashboards read for one day."""

    day_id: str
    late_night: LateNightComponents
    room_service: Amount
    shift_components: Mapping[str, ShiftComponents]
    shifts: Mapping[str, Amount]
    lunch: Amount
    dinner: Amount
    breakfast: BreakfastComponents
    generic: Mapping[str, Amount]
    frigobar: Amount
    events: EventComponents
    internal_consumption: InternalConsumptionTotals
    adjustment: Decimal
    adjustment_by_shift: Mapping[str, Decimal]
    grand_total: GrandTotals
    breakfast_control: Amount = field(default_factory=Amount.zero)
    no_show: Amount = field(default_factory=Amount.zero)

    def period_totals(self) -> dict[str, Amount]:
        """Totals keyed by period id, the way the general report lists them."""
        totals: dict[str, Amount] = {
            "madrugada": self.late_night.room_service,
            "cafeDaManha": self.breakfast.total,
        }
        totals.update(self.shifts)
        totals.update(self.generic)
        totals["eventos"] = self.events.total
        totals["frigobar"] = self.frigobar
        totals["roomService"] = self.room_service - self.late_night.room_service
        return totals


@dataclass(frozen=True)
class ReversalSummary:
    """Reconciled view of a batch of reversals."""

    credit: Amount
    debit: Amount
    control: Amount
    quantity: Decimal
    invoice_value: Decimal
    difference: Decimal
    by_reason: Mapping[str, Amount]
    neutralized_ids: frozenset[str]
    active: tuple[ReversalRecord, ...]

    @property
    def balance(self) -> Decimal:
        """Net reversal value of every record still active."""
        return self.credit.value + self.debit.value + self.control.value


@dataclass(frozen=True)
class DailyBreakdown:
    """One day's line in a range report."""

    date: date
    period_totals: Mapping[str, Amount]
    room_service: Amount
    total_with_internal_consumption: Amount
    total_without_internal_consumption: Amount
    internal_consumption: Amount
    adjustment: Decimal
    created_at: Optional[datetime] = None
    last_modified_at: Optional[datetime] = None


@dataclass(frozen=True)
class RollupSummary:
    """Running totals over a range of days."""

    period_totals: Mapping[str, Amount]
    grand_total: GrandTotals
    internal_consumption: InternalConsumptionTotals
    adjustment: Decimal
    day_count: int


@dataclass(frozen=True)
class RollupReport:
    """Per-day breakdown plus the cumulative summary."""

    days: tuple[DailyBreakdown, ...]
    summary: RollupSummary


@dataclass(frozen=True)
class DashboardTotals:
    """Aggregates shown on the dashboard cards and tables."""

    room_service: Amount
    room_service_dishes: Decimal
    breakfast: Amount
    lunch: Amount
    dinner: Amount
    generic: Mapping[str, Amount]
    frigobar: Amount
    events_direct: Amount
    events_hotel: Amount
    internal_consumption: InternalConsumptionTotals
    adjustment: Decimal
    grand_total: GrandTotals
