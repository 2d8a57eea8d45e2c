"""Relaunch domain service."""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from fnbledger.database.base import Database
from fnbledger.domain.entities import ReversalReason, ReversalRecord
from fnbledger.domain.errors import NotFoundError, reversal_not_found

logger = logging.getLogger(__name__)

DEFAULT_REGISTERED_BY = "sistema"


class RelaunchService:
    """Service for re-posting charges that a reversal took off a bill."""

    def __init__(self, db: Database):
        """Initialize relaunch service.

        Args:
            db: Database instance
        """
        self.db = db

    def relaunch(
        self,
        original_id: str,
        observation: Optional[str] = None,
        registered_by: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ReversalRecord:
        """Store a relaunch credit for a stored reversal.

        The credit is dated today and copies the room, invoice, quantity,
        invoice value and category of the original, so the reconciler pairs
        the two when both fall inside a report window.

        Args:
            original_id: Id of the reversal to relaunch
            observation: Optional note for the new credit
            registered_by: Who registered the credit (defaults to "sistema")
            today: Date of the credit (defaults to the current date)

        Returns:
            The stored relaunch record, with its generated id

        Raises:
            NotFoundError: If no reversal has the given id
        """
        original = self.db.get_reversal(original_id)
        if original is None:
            raise NotFoundError(reversal_not_found(original_id))

        credit = ReversalRecord(
            date=(today or date.today()).isoformat(),
            reason=ReversalReason.RELAUNCH,
            raw_reason=ReversalReason.RELAUNCH.value,
            category=original.category,
            room=original.room,
            invoice=original.invoice,
            quantity=original.quantity,
            invoice_value=original.invoice_value,
            reversal_value=abs(original.reversal_value),
            observation=observation or "",
            registered_by=registered_by or DEFAULT_REGISTERED_BY,
        )
        credit_id = self.db.add_reversal(credit)
        logger.info("Relaunched reversal %s as %s", original_id, credit_id)
        return replace(credit, id=credit_id)
