"""Channel configuration for the entry forms.

Channel ids in stored records are built from a shift prefix and a channel
name (``aptRoomServiceQtdPedidos``, ``jntCiEFaturadosTotalCI``). The
configuration below knows which prefixes exist and which channels belong to
which sub-category, and is handed to the decomposer explicitly.
"""

from dataclasses import dataclass, field
from typing import Optional

FIRST_LUNCH_SHIFT = "almocoPrimeiroTurno"
SECOND_LUNCH_SHIFT = "almocoSegundoTurno"
DINNER_SHIFT = "jantar"

LATE_NIGHT = "madrugada"
BREAKFAST = "cafeDaManha"
EVENTS = "eventos"
BREAKFAST_CONTROL = "controleCafeDaManha"
BREAKFAST_NO_SHOW = "cafeManhaNoShow"

GUEST_LIST_PRICE = "cdmListaHospedes"
NO_SHOW_PRICE = "cdmNoShow"


@dataclass(frozen=True)
class ShiftDefinition:
    """One restaurant shift and the prefixes its channels carry."""

    period_id: str
    prefix: str
    frigobar_prefix: str
    label: str
    meal: str


@dataclass(frozen=True)
class ChannelConfig:
    """Channel layout of the entry forms."""

    shifts: tuple[ShiftDefinition, ...]
    flat_periods: tuple[str, ...]
    breakfast_guest_channels: tuple[str, ...]
    breakfast_walk_in_channels: tuple[str, ...]
    tender_types: tuple[str, ...]
    event_locations: tuple[str, str] = ("DIRETO", "HOTEL")
    labels: dict[str, str] = field(default_factory=dict)

    def shift(self, period_id: str) -> Optional[ShiftDefinition]:
        for definition in self.shifts:
            if definition.period_id == period_id:
                return definition
        return None

    def shifts_for_meal(self, meal: str) -> tuple[ShiftDefinition, ...]:
        return tuple(s for s in self.shifts if s.meal == meal)

    def label(self, period_id: str) -> str:
        return self.labels.get(period_id, period_id)

    # Channel keys per sub-category

    def room_service_keys(self, shift: ShiftDefinition) -> tuple[str, tuple[str, ...]]:
        """Quantity channel and value channels of a shift's room service."""
        p = shift.prefix
        return f"{p}RoomServiceQtdPedidos", (
            f"{p}RoomServicePagDireto",
            f"{p}RoomServiceValorServico",
        )

    def legacy_billed_keys(self, shift: ShiftDefinition) -> tuple[str, tuple[str, ...]]:
        p = shift.prefix
        return f"{p}CiEFaturadosFaturadosQtd", (
            f"{p}CiEFaturadosValorHotel",
            f"{p}CiEFaturadosValorFuncionario",
        )

    def legacy_internal_consumption_keys(self, shift: ShiftDefinition) -> tuple[str, str]:
        """Quantity channel and total-value channel of the old combined tab."""
        p = shift.prefix
        return f"{p}CiEFaturadosConsumoInternoQtd", f"{p}CiEFaturadosTotalCI"

    def legacy_adjustment_key(self, shift: ShiftDefinition) -> str:
        return f"{shift.prefix}CiEFaturadosReajusteCI"

    def adjustment_key(self) -> str:
        return "reajusteCI"

    def frigobar_keys(self, shift: ShiftDefinition) -> tuple[str, tuple[str, ...]]:
        p = shift.frigobar_prefix
        return f"{p}TotalQuartos", (f"{p}PagRestaurante", f"{p}PagHotel")

    def tender_of(self, shift: ShiftDefinition, channel_id: str) -> str:
        """Map a table-service channel id to its tender type name."""
        prefix = f"{shift.prefix}ClienteMesa"
        stem = channel_id[len(prefix):] if channel_id.startswith(prefix) else channel_id
        for tender in self.tender_types:
            if stem.startswith(tender):
                return tender
        return stem or channel_id

    def late_night_keys(self) -> tuple[str, str, tuple[str, ...]]:
        """Orders channel, dishes channel and value channels."""
        return (
            "madrugadaRoomServiceQtdPedidos",
            "madrugadaRoomServiceQtdPratos",
            ("madrugadaRoomServicePagDireto", "madrugadaRoomServiceValorServico"),
        )


def default_channel_config() -> ChannelConfig:
    """Build the channel layout used by the production entry forms."""
    return ChannelConfig(
        shifts=(
            ShiftDefinition(FIRST_LUNCH_SHIFT, "apt", "frgPT", "Almoço Primeiro Turno", "lunch"),
            ShiftDefinition(SECOND_LUNCH_SHIFT, "ast", "frgST", "Almoço Segundo Turno", "lunch"),
            ShiftDefinition(DINNER_SHIFT, "jnt", "frgJNT", "Jantar", "dinner"),
        ),
        flat_periods=(
            "breakfast",
            "italianoAlmoco",
            "italianoJantar",
            "indianoAlmoco",
            "indianoJantar",
            "baliAlmoco",
            "baliHappy",
        ),
        breakfast_guest_channels=("cdmListaHospedes", "cdmNoShow", "cdmSemCheckIn"),
        breakfast_walk_in_channels=("cdmCafeAssinado", "cdmDiretoCartao"),
        tender_types=("Dinheiro", "Credito", "Debito", "Pix", "TicketRefeicao", "Retirada", "TotaisQtd"),
        labels={
            LATE_NIGHT: "Madrugada",
            BREAKFAST: "Café da Manhã",
            "breakfast": "Breakfast",
            FIRST_LUNCH_SHIFT: "Almoço Primeiro Turno",
            SECOND_LUNCH_SHIFT: "Almoço Segundo Turno",
            DINNER_SHIFT: "Jantar",
            "italianoAlmoco": "RW Italiano Almoço",
            "italianoJantar": "RW Italiano Jantar",
            "indianoAlmoco": "RW Indiano Almoço",
            "indianoJantar": "RW Indiano Jantar",
            "baliAlmoco": "Bali Almoço",
            "baliHappy": "Bali Happy Hour",
            EVENTS: "Eventos",
            "frigobar": "Frigobar",
            "roomService": "Room Service",
        },
    )
