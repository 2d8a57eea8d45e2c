"""Tests for the SQLAlchemy database implementation."""

from datetime import date
from decimal import Decimal

import pytest
from fnbledger.database.base import Database
from fnbledger.database.factories import create_sqlite_database
from fnbledger.database.sqlalchemy_db import SQLAlchemyDatabase
from fnbledger.domain.entities import DayRecord, ReversalReason, ReversalRecord
from fnbledger.domain.errors import NotFoundError, ValidationError


def test_database_implements_interface(temp_db):
    assert isinstance(temp_db, Database)
    assert isinstance(temp_db, SQLAlchemyDatabase)


def test_factory_uses_environment_path(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("FNBLEDGER_DB_PATH", str(db_path))
    db = create_sqlite_database()
    assert db.database_url == f"sqlite:///{db_path}"
    db.disconnect()


def test_save_and_get_day_record(temp_db, full_day):
    temp_db.save_day_record(full_day)
    stored = temp_db.get_day_record("2024-03-15")
    assert stored.id == "2024-03-15"
    assert stored.periods == full_day.periods
    assert stored.created_at is not None
    assert stored.last_modified_at is not None


def test_get_missing_day_record(temp_db):
    assert temp_db.get_day_record("2024-01-01") is None


def test_save_replaces_existing_day(temp_db):
    temp_db.save_day_record(DayRecord(id="2024-03-15", periods={"jantar": {}}))
    temp_db.save_day_record(
        DayRecord(id="2024-03-15", periods={"baliHappy": {}}, observations="Feriado")
    )
    stored = temp_db.get_day_record("2024-03-15")
    assert stored.periods == {"baliHappy": {}}
    assert stored.observations == "Feriado"
    assert len(temp_db.fetch_day_records()) == 1


def test_fetch_day_records_range_is_inclusive_and_ordered(temp_db):
    for day_id in ["2024-03-20", "2024-03-01", "2024-03-10", "2024-04-01"]:
        temp_db.save_day_record(DayRecord(id=day_id))
    records = temp_db.fetch_day_records(date(2024, 3, 1), date(2024, 3, 20))
    assert [r.id for r in records] == ["2024-03-01", "2024-03-10", "2024-03-20"]
    assert [r.id for r in temp_db.fetch_day_records(start_date=date(2024, 3, 15))] == [
        "2024-03-20",
        "2024-04-01",
    ]


def test_delete_day_record(temp_db):
    temp_db.save_day_record(DayRecord(id="2024-03-15"))
    temp_db.delete_day_record("2024-03-15")
    assert temp_db.get_day_record("2024-03-15") is None
    with pytest.raises(NotFoundError):
        temp_db.delete_day_record("2024-03-15")


def test_decimal_values_in_periods_are_stored(temp_db):
    temp_db.save_day_record(
        DayRecord(id="2024-03-15", periods={"x": {"channels": {"a": {"vtotal": Decimal("1.5")}}}})
    )
    stored = temp_db.get_day_record("2024-03-15")
    assert stored.periods["x"]["channels"]["a"]["vtotal"] == "1.5"


def test_add_reversal_generates_id(temp_db):
    record = ReversalRecord.from_raw(
        {"date": "2024-03-15", "reason": "cortesia", "valorEstorno": -20, "uh": "101"}
    )
    reversal_id = temp_db.add_reversal(record)
    assert reversal_id
    stored = temp_db.fetch_reversals()
    assert stored[0].id == reversal_id
    assert stored[0].reason is ReversalReason.COURTESY
    assert stored[0].reversal_value == Decimal("-20")
    assert stored[0].room == "101"


def test_add_reversal_keeps_given_id(temp_db):
    record = ReversalRecord.from_raw({"id": "abc", "date": "2024-03-15", "reason": "cortesia"})
    assert temp_db.add_reversal(record) == "abc"


def test_add_reversal_rejects_stored_id(temp_db):
    record = ReversalRecord.from_raw({"id": "abc", "date": "2024-03-15", "reason": "cortesia"})
    temp_db.add_reversal(record)
    with pytest.raises(ValidationError, match="already exists"):
        temp_db.add_reversal(record)

    # The session is still usable after the failed insert
    other = ReversalRecord.from_raw({"id": "xyz", "date": "2024-03-16", "reason": "cortesia"})
    assert temp_db.add_reversal(other) == "xyz"
    assert [r.id for r in temp_db.fetch_reversals()] == ["abc", "xyz"]


def test_get_reversal(temp_db):
    temp_db.add_reversal(
        ReversalRecord.from_raw({"id": "abc", "date": "2024-03-15", "reason": "nao consumido", "uh": "7"})
    )
    stored = temp_db.get_reversal("abc")
    assert stored.room == "7"
    assert stored.reason is ReversalReason.NOT_CONSUMED
    assert temp_db.get_reversal("missing") is None


def test_fetch_reversals_filters_and_orders(temp_db):
    rows = [
        {"id": "a", "date": "2024-03-16", "reason": "cortesia", "category": "bar"},
        {"id": "b", "date": "2024-03-15", "reason": "relancamento", "category": "restaurante"},
        {"id": "c", "date": "2024-03-15", "reason": "nao consumido", "category": "restaurante"},
        {"id": "d", "date": "2024-02-28", "reason": "cortesia", "category": "restaurante"},
    ]
    for row in rows:
        temp_db.add_reversal(ReversalRecord.from_raw(row))

    march = temp_db.fetch_reversals(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31))
    assert [r.id for r in march] == ["b", "c", "a"]
    restaurant = temp_db.fetch_reversals(category="restaurante")
    assert [r.id for r in restaurant] == ["d", "b", "c"]
    assert len(temp_db.fetch_reversals(category="all")) == 4


def test_unknown_reason_round_trips_as_control(temp_db):
    temp_db.add_reversal(ReversalRecord.from_raw({"date": "2024-03-15", "reason": "outro"}))
    stored = temp_db.fetch_reversals()[0]
    assert stored.reason is None
    assert stored.raw_reason == "outro"


def test_unit_prices(temp_db):
    assert temp_db.get_unit_price_config().prices == {}
    temp_db.set_unit_price("cdmListaHospedes", Decimal("45.00"))
    temp_db.set_unit_price("cdmNoShow", Decimal("30"))
    temp_db.set_unit_price("cdmListaHospedes", Decimal("50"))
    config = temp_db.get_unit_price_config()
    assert config.price("cdmListaHospedes") == Decimal("50")
    assert config.price("cdmNoShow") == Decimal("30")
    assert config.price("unknown") == Decimal("0")
