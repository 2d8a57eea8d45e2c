"""Reversal (estorno) reconciliation.

A relaunch is a credit that re-posts a charge which an earlier or later
debit reversal took off a guest's bill. When a credit and a debit refer to
the same room, the same invoice and the same absolute amount, the pair
cancels out and neither counts in the report.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from fnbledger.domain.entities import (
    Amount,
    ReversalReason,
    ReversalRecord,
    ReversalRole,
    ReversalSummary,
)
from fnbledger.utils.amount_parser import ZERO

logger = logging.getLogger(__name__)


def record_key(record: ReversalRecord, index: int) -> str:
    """Identifier used in ``neutralized_ids``; list position when the record has no id."""
    return record.id if record.id else f"#{index}"


def normalize_sign(record: ReversalRecord) -> ReversalRecord:
    """Store credits as positive values and every other reversal as negative."""
    magnitude = abs(record.reversal_value)
    value = magnitude if record.role is ReversalRole.CREDIT else -magnitude
    if value == record.reversal_value:
        return record
    return replace(record, reversal_value=value)


def matches_reason(record: ReversalRecord, reason: Optional[str]) -> bool:
    """Whether a record carries ``reason``, compared case-insensitively.

    ``None`` and ``"all"`` match every record.
    """
    if not reason or reason == "all":
        return True
    wanted = ReversalReason.parse(reason)
    if wanted is None:
        return record.raw_reason.strip().lower() == reason.strip().lower()
    return record.reason is wanted


def filter_records(
    records: Iterable[ReversalRecord],
    category: Optional[str] = None,
    reason: Optional[str] = None,
) -> list[ReversalRecord]:
    """Keep records of a category and/or reason; ``None`` or ``"all"`` keeps everything."""
    result = list(records)
    if category and category != "all":
        result = [r for r in result if r.category == category]
    if reason and reason != "all":
        result = [r for r in result if matches_reason(r, reason)]
    return result


def sort_by_date(records: Iterable[ReversalRecord]) -> list[ReversalRecord]:
    """Sort by date; records on the same date keep their order."""
    return sorted(records, key=lambda r: r.date)


def record_difference(record: ReversalRecord) -> Decimal:
    """Invoice value left after the reversal, as shown on the report."""
    if not record.invoice_value:
        return ZERO
    if record.reason is ReversalReason.RELAUNCH:
        return record.invoice_value - record.reversal_value
    return record.invoice_value + record.reversal_value


class ReversalReconciler:
    """Match relaunch credits against debit reversals and summarize the rest."""

    def match_pairs(self, records: Sequence[ReversalRecord]) -> list[tuple[int, int]]:
        """Find neutralizing (credit, debit) pairs, as list indices.

        Credits are taken in list order; each picks the first debit not yet
        consumed with the same room, the same invoice and the same absolute
        reversal value.
        """
        credits = [
            (index, record)
            for index, record in enumerate(records)
            if record.role is ReversalRole.CREDIT and record.is_matchable
        ]
        debits = [
            (index, record)
            for index, record in enumerate(records)
            if record.role is ReversalRole.DEBIT and record.is_matchable
        ]

        consumed: set[int] = set()
        pairs: list[tuple[int, int]] = []
        for credit_index, credit in credits:
            for debit_index, debit in debits:
                if debit_index in consumed:
                    continue
                if (
                    debit.room == credit.room
                    and debit.invoice == credit.invoice
                    and abs(debit.reversal_value) == abs(credit.reversal_value)
                ):
                    consumed.add(debit_index)
                    pairs.append((credit_index, debit_index))
                    logger.debug(
                        "Relaunch %s neutralizes %s (room %s, invoice %s)",
                        record_key(credit, credit_index),
                        record_key(debit, debit_index),
                        credit.room,
                        credit.invoice,
                    )
                    break
        return pairs

    def reconcile(
        self, records: Sequence[ReversalRecord], reason: Optional[str] = None
    ) -> ReversalSummary:
        """Reconcile a batch of reversals.

        Pairs are matched over the whole batch before ``reason`` narrows what
        is summarized, so a relaunch still cancels its debit when only debits
        are reported.

        Args:
            records: Reversals of the reporting window, in list order
            reason: Only summarize active records with this reason

        Returns:
            ReversalSummary over the records left active
        """
        records = list(records)
        neutralized: set[int] = set()
        for credit_index, debit_index in self.match_pairs(records):
            neutralized.update((credit_index, debit_index))

        credit = Amount.zero()
        debit = Amount.zero()
        control = Amount.zero()
        quantity = ZERO
        invoice_value = ZERO
        difference = ZERO
        by_reason: dict[str, Amount] = {}
        active: list[ReversalRecord] = []

        for index, record in enumerate(records):
            if index in neutralized or not matches_reason(record, reason):
                continue
            active.append(record)

            # A relaunch re-posts an existing charge: only its value counts
            is_relaunch = record.reason is ReversalReason.RELAUNCH
            counted_quantity = ZERO if is_relaunch else record.quantity
            quantity += counted_quantity
            if not is_relaunch:
                invoice_value += record.invoice_value

            amount = Amount(counted_quantity, record.reversal_value)
            if record.role is ReversalRole.CREDIT:
                credit = credit + amount
            elif record.role is ReversalRole.DEBIT:
                debit = debit + amount
            else:
                control = control + amount

            difference += record_difference(record)
            label = record.reason_label
            by_reason[label] = by_reason.get(label, Amount.zero()) + amount

        return ReversalSummary(
            credit=credit,
            debit=debit,
            control=control,
            quantity=quantity,
            invoice_value=invoice_value,
            difference=difference,
            by_reason=by_reason,
            neutralized_ids=frozenset(record_key(records[i], i) for i in neutralized),
            active=tuple(active),
        )
