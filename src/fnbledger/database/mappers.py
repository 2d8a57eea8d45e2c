"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the stored JSON layout can
change without touching the engine.
"""

import json
from decimal import Decimal

from fnbledger.domain import entities as domain
from fnbledger.database.models import DailyEntry as ORMDailyEntry, Estorno as ORMEstorno


def _decimal_default(value):
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_periods(record: domain.DayRecord) -> str:
    """Serialize a day record's period payloads."""
    return json.dumps(dict(record.periods), default=_decimal_default, ensure_ascii=False)


def day_record_to_domain(orm_entry: ORMDailyEntry) -> domain.DayRecord:
    """Convert SQLAlchemy DailyEntry model to domain DayRecord entity."""
    try:
        periods = json.loads(orm_entry.periods or "{}")
    except json.JSONDecodeError:
        periods = {}
    return domain.DayRecord(
        id=orm_entry.id,
        periods=periods if isinstance(periods, dict) else {},
        observations=orm_entry.general_observations,
        created_at=orm_entry.created_at,
        last_modified_at=orm_entry.last_modified_at,
    )


def reversal_to_domain(orm_estorno: ORMEstorno) -> domain.ReversalRecord:
    """Convert SQLAlchemy Estorno model to domain ReversalRecord entity."""
    return domain.ReversalRecord(
        id=orm_estorno.id,
        date=orm_estorno.date,
        category=orm_estorno.category,
        reason=domain.ReversalReason.parse(orm_estorno.reason),
        raw_reason=orm_estorno.reason,
        room=orm_estorno.uh,
        invoice=orm_estorno.nf,
        quantity=Decimal(orm_estorno.quantity or 0),
        invoice_value=Decimal(orm_estorno.valor_total_nota or 0),
        reversal_value=Decimal(orm_estorno.valor_estorno or 0),
        observation=orm_estorno.observation,
        registered_by=orm_estorno.registered_by,
    )


def reversal_to_orm(record: domain.ReversalRecord, reversal_id: str) -> ORMEstorno:
    """Build a SQLAlchemy Estorno row from a domain ReversalRecord."""
    return ORMEstorno(
        id=reversal_id,
        date=record.date,
        category=record.category,
        reason=record.raw_reason or (record.reason.value if record.reason else ""),
        uh=record.room,
        nf=record.invoice,
        quantity=record.quantity,
        valor_total_nota=record.invoice_value,
        valor_estorno=record.reversal_value,
        observation=record.observation,
        registered_by=record.registered_by,
    )
