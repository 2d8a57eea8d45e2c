"""Tests for period decomposition across both entry-form generations."""

from decimal import Decimal

import pytest
from conftest import channel, flat_period, make_record, shift_period
from fnbledger.domain.channels import default_channel_config
from fnbledger.domain.decomposer import (
    ItemizedSource,
    LegacySource,
    PeriodDecomposer,
    merge_sources,
    sum_channels,
)
from fnbledger.domain.entities import Amount, BilledItemType, UnitPriceConfig


@pytest.fixture
def decomposer():
    return PeriodDecomposer(default_channel_config())


def test_merge_sources_sums_every_variant():
    merged = merge_sources(
        LegacySource(Amount(Decimal(2), Decimal(100))),
        ItemizedSource(Amount(Decimal(1), Decimal(50)), item_count=1),
    )
    assert merged == Amount(3, 150)


def test_sum_channels_all_or_selected():
    channels = {"a": channel(1, 10), "b": channel(2, 20), "c": "junk"}
    assert sum_channels(channels) == Amount(3, 30)
    assert sum_channels(channels, ["b"]) == Amount(2, 20)


def test_billed_legacy_only(decomposer):
    record = make_record(
        almocoPrimeiroTurno=shift_period(
            ciEFaturados={
                "channels": {
                    "aptCiEFaturadosFaturadosQtd": channel(qtd=2),
                    "aptCiEFaturadosValorHotel": channel(vtotal=70),
                    "aptCiEFaturadosValorFuncionario": channel(vtotal=30),
                }
            }
        )
    )
    parts = decomposer.decompose_shift(record, "almocoPrimeiroTurno")
    assert parts.billed == Amount(2, 100)


def test_billed_itemized_only(decomposer):
    record = make_record(
        jantar=shift_period(
            faturado={
                "faturadoItems": [
                    {"clientName": "A", "type": "hotel", "quantity": 1, "value": 50},
                    {"clientName": "B", "type": "funcionario", "quantity": "2", "value": "30.5"},
                ]
            }
        )
    )
    parts = decomposer.decompose_shift(record, "jantar")
    assert parts.billed == Amount(3, Decimal("80.5"))
    assert parts.billed_by_type[BilledItemType.HOTEL] == Amount(1, 50)
    assert parts.billed_by_type[BilledItemType.STAFF] == Amount(2, Decimal("30.5"))


def test_billed_both_generations_are_summed(decomposer):
    record = make_record(
        almocoSegundoTurno=shift_period(
            ciEFaturados={
                "channels": {
                    "astCiEFaturadosFaturadosQtd": channel(qtd=2),
                    "astCiEFaturadosValorHotel": channel(vtotal=100),
                }
            },
            faturado={"faturadoItems": [{"quantity": 1, "value": 50, "type": "outros"}]},
        )
    )
    itemized, legacy = decomposer.billed_sources(
        record.period("almocoSegundoTurno"), default_channel_config().shift("almocoSegundoTurno")
    )
    assert itemized.amount == Amount(1, 50)
    assert itemized.item_count == 1
    assert legacy.amount == Amount(2, 100)
    parts = decomposer.decompose_shift(record, "almocoSegundoTurno")
    assert parts.billed == Amount(3, 150)


def test_unknown_billed_type_is_other(decomposer):
    record = make_record(
        jantar=shift_period(faturado={"faturadoItems": [{"type": "???", "quantity": 1, "value": 9}]})
    )
    parts = decomposer.decompose_shift(record, "jantar")
    assert parts.billed_by_type == {BilledItemType.OTHER: Amount(1, 9)}


def test_internal_consumption_legacy_excludes_adjustment(decomposer):
    record = make_record(
        jantar=shift_period(
            ciEFaturados={
                "channels": {
                    "jntCiEFaturadosConsumoInternoQtd": channel(qtd=4),
                    "jntCiEFaturadosTotalCI": channel(vtotal=120),
                    "jntCiEFaturadosReajusteCI": channel(vtotal=20),
                }
            },
            consumoInterno={"consumoInternoItems": [{"quantity": 1, "value": 15}]},
        )
    )
    parts = decomposer.decompose_shift(record, "jantar")
    assert parts.internal_consumption == Amount(5, 115)


def test_shift_restaurant_sub_tabs_sum_every_channel(decomposer):
    record = make_record(
        almocoPrimeiroTurno=shift_period(
            hospedes={"channels": {"x": channel(1, 10), "y": channel(2, 20)}},
            clienteMesa={"channels": {"aptClienteMesaPix": channel(3, 30)}},
            delivery={"channels": {"anything": channel(1, 5)}},
        )
    )
    parts = decomposer.decompose_shift(record, "almocoPrimeiroTurno")
    assert parts.guest_folio == Amount(3, 30)
    assert parts.table_service == Amount(3, 30)
    assert parts.delivery == Amount(1, 5)
    assert parts.restaurant == Amount(7, 65)


def test_tender_breakdown(decomposer):
    record = make_record(
        almocoPrimeiroTurno=shift_period(
            clienteMesa={
                "channels": {
                    "aptClienteMesaDinheiro": channel(2, 100),
                    "aptClienteMesaCreditoVisa": channel(1, 60),
                    "aptClienteMesaCreditoMaster": channel(1, 40),
                    "aptClienteMesaGorjeta": channel(0, 15),
                }
            }
        )
    )
    parts = decomposer.decompose_shift(record, "almocoPrimeiroTurno")
    assert parts.tender_breakdown["Dinheiro"] == Amount(2, 100)
    assert parts.tender_breakdown["Credito"] == Amount(2, 100)
    assert parts.tender_breakdown["Gorjeta"] == Amount(0, 15)


def test_room_service_and_frigobar_read_configured_keys_only(decomposer):
    record = make_record(
        jantar=shift_period(
            roomService={
                "channels": {
                    "jntRoomServiceQtdPedidos": channel(qtd=3),
                    "jntRoomServicePagDireto": channel(vtotal=90),
                    "jntRoomServiceValorServico": channel(vtotal=9),
                    "jntRoomServiceSomethingElse": channel(5, 500),
                }
            },
            frigobar={
                "channels": {
                    "frgJNTTotalQuartos": channel(qtd=2),
                    "frgJNTPagRestaurante": channel(vtotal=10),
                    "frgJNTPagHotel": channel(vtotal=25),
                    "frgJNTOther": channel(9, 999),
                }
            },
        )
    )
    parts = decomposer.decompose_shift(record, "jantar")
    assert parts.room_service == Amount(3, 99)
    assert parts.frigobar == Amount(2, 35)


def test_unknown_shift_is_all_zero(decomposer, full_day):
    parts = decomposer.decompose_shift(full_day, "brunch")
    assert parts.billed.is_zero
    assert parts.restaurant.is_zero
    assert parts.tender_breakdown == {}


def test_missing_or_malformed_shift_is_all_zero(decomposer):
    record = make_record(jantar="not a payload")
    parts = decomposer.decompose_shift(record, "jantar")
    assert parts.internal_consumption.is_zero
    assert decomposer.decompose_shift(make_record(), "jantar").frigobar.is_zero


def test_flat_period(decomposer):
    record = make_record(italianoAlmoco=flat_period(a=channel(2, 80), b=channel(1, "40.50")))
    assert decomposer.decompose_flat(record, "italianoAlmoco") == Amount(3, Decimal("120.50"))
    assert decomposer.decompose_flat(record, "indianoJantar").is_zero


def test_late_night(decomposer, full_day):
    late = decomposer.decompose_late_night(full_day)
    assert late.orders == 2
    assert late.dishes == 3
    assert late.value == 66
    assert late.room_service == Amount(2, 66)


def test_breakfast(decomposer, full_day):
    breakfast = decomposer.decompose_breakfast(full_day)
    assert breakfast.guests == Amount(43, 2150)
    assert breakfast.walk_in == Amount(5, 260)
    assert breakfast.total == Amount(48, 2410)


def test_events_split_by_location(decomposer):
    record = make_record(
        eventos={
            "items": [
                {"subEvents": [{"location": "DIRETO", "quantity": 10, "totalValue": 500}]},
                {
                    "subEvents": [
                        {"location": "HOTEL", "quantity": 5, "totalValue": "250"},
                        {"location": "OUTRO", "quantity": 99, "totalValue": 999},
                    ]
                },
                "junk",
            ]
        }
    )
    events = decomposer.decompose_events(record)
    assert events.direct == Amount(10, 500)
    assert events.hotel == Amount(5, 250)
    assert events.total == Amount(15, 750)


def test_breakfast_control_priced_from_settings(decomposer):
    record = make_record(
        controleCafeDaManha={
            "adultoQtd": 10,
            "crianca01Qtd": 2,
            "crianca02Qtd": "1",
            "contagemManual": 0,
            "semCheckIn": 1,
        },
        cafeManhaNoShow={"items": [{"room": "101"}, {"room": "202"}]},
    )
    prices = UnitPriceConfig({"cdmListaHospedes": Decimal("50"), "cdmNoShow": Decimal("35")})
    assert decomposer.decompose_breakfast_control(record, prices) == Amount(14, 700)
    assert decomposer.decompose_no_show(record, prices) == Amount(2, 70)


def test_breakfast_control_without_prices(decomposer):
    record = make_record(controleCafeDaManha={"adultoQtd": 4})
    assert decomposer.decompose_breakfast_control(record, UnitPriceConfig()) == Amount(4, 0)
    assert decomposer.decompose_no_show(record, UnitPriceConfig()).is_zero


def test_decomposition_does_not_mutate_record(decomposer, full_day):
    import copy

    before = copy.deepcopy(dict(full_day.periods))
    decomposer.decompose_shift(full_day, "almocoPrimeiroTurno")
    decomposer.decompose_events(full_day)
    assert dict(full_day.periods) == before
