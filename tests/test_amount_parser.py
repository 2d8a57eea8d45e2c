"""Tests for amount parsing and safe numeric extraction."""

from decimal import Decimal

import pytest
from fnbledger.utils.amount_parser import (
    channel_quantity,
    channel_value,
    channels_of,
    item_list,
    parse_amount,
    safe_number,
    sub_tab,
    to_decimal,
)


def test_parse_amount_plain():
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_amount_currency_and_thousands():
    assert parse_amount("R$1,234.56") == Decimal("1234.56")


def test_parse_amount_parentheses_negative():
    assert parse_amount("(50.00)") == Decimal("-50.00")


@pytest.mark.parametrize("text", ["", "   ", "abc", "nan", "inf"])
def test_parse_amount_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_amount(text)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, Decimal("5")),
        (0.1, Decimal("0.1")),
        (Decimal("2.50"), Decimal("2.50")),
        ("12.5", Decimal("12.5")),
        ("12.5abc", Decimal("12.5")),
        ("  -3", Decimal("-3")),
        (".5", Decimal("0.5")),
    ],
)
def test_to_decimal_numeric(raw, expected):
    assert to_decimal(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, True, False, "", "abc", "NaN", float("nan"), float("inf"), [], {}, {"qtd": 1}],
)
def test_to_decimal_falls_back_to_zero(raw):
    assert to_decimal(raw) == Decimal("0")


@pytest.mark.parametrize(
    "raw", ["1e1000000", "-1e400", "1e-400", Decimal("1E+999999"), 10**400]
)
def test_to_decimal_out_of_range_is_zero(raw):
    assert to_decimal(raw) == Decimal("0")


def test_to_decimal_keeps_large_but_representable_values():
    assert to_decimal("1e300") == Decimal("1e300")
    assert to_decimal("1e300") + to_decimal("1e300") == Decimal("2e300")


def test_safe_number_walks_nested_path():
    data = {"channels": {"cdmNoShow": {"qtd": "3"}}}
    assert safe_number(data, "channels.cdmNoShow.qtd") == Decimal("3")


@pytest.mark.parametrize(
    "data",
    [
        None,
        {},
        {"channels": None},
        {"channels": {"cdmNoShow": 5}},
        {"channels": {"cdmNoShow": {"vtotal": 10}}},
        {"channels": {"cdmNoShow": {"qtd": None}}},
        {"channels": [1, 2]},
    ],
)
def test_safe_number_missing_paths_are_zero(data):
    assert safe_number(data, "channels.cdmNoShow.qtd") == Decimal("0")


def test_safe_number_is_idempotent():
    data = {"a": {"b": "7.25"}}
    assert safe_number(data, "a.b") == safe_number(data, "a.b") == Decimal("7.25")


def test_sub_tab_and_channels_of():
    period = {"subTabs": {"hospedes": {"channels": {"x": {"qtd": 1, "vtotal": 2}}}}}
    channels = channels_of(sub_tab(period, "hospedes"))
    assert channel_quantity(channels, "x") == Decimal("1")
    assert channel_value(channels, "x") == Decimal("2")


def test_sub_tab_tolerates_odd_shapes():
    assert sub_tab(None, "hospedes") == {}
    assert sub_tab({"subTabs": "oops"}, "hospedes") == {}
    assert sub_tab({"subTabs": {"hospedes": 3}}, "hospedes") == {}
    assert channels_of({"channels": "oops"}) == {}


def test_item_list_keeps_mappings_only():
    container = {"items": [{"a": 1}, None, "x", {"b": 2}]}
    assert item_list(container, "items") == [{"a": 1}, {"b": 2}]
    assert item_list({"items": "nope"}, "items") == []
    assert item_list(None, "items") == []


def test_channel_accessors_on_missing_channel():
    assert channel_quantity({}, "missing") == Decimal("0")
    assert channel_value(None, "missing") == Decimal("0")
