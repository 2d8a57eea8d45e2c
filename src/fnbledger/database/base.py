"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from fnbledger.domain.entities import DayRecord, ReversalRecord, UnitPriceConfig


class Database(ABC):
    """Abstract database interface for fnbledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Day record operations
    @abstractmethod
    def save_day_record(self, record: DayRecord) -> None:
        """Create or replace the entry for a day."""
        pass

    @abstractmethod
    def get_day_record(self, day_id: str) -> Optional[DayRecord]:
        """Get the entry for a day (ISO date string)."""
        pass

    @abstractmethod
    def fetch_day_records(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[DayRecord]:
        """List entries between two dates (inclusive), ordered by date."""
        pass

    @abstractmethod
    def delete_day_record(self, day_id: str) -> None:
        """Delete the entry for a day."""
        pass

    # Reversal operations
    @abstractmethod
    def add_reversal(self, record: ReversalRecord) -> str:
        """Store a reversal. Returns its id.

        Raises:
            ValidationError: If a reversal with the same id is already stored
        """
        pass

    @abstractmethod
    def get_reversal(self, reversal_id: str) -> Optional[ReversalRecord]:
        """Get a reversal by id."""
        pass

    @abstractmethod
    def fetch_reversals(
        self,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ReversalRecord]:
        """List reversals of a category (all when None or "all") in a date range.

        Records come back in date order, then in the order they were stored.
        """
        pass

    # Settings operations
    @abstractmethod
    def get_unit_price_config(self) -> UnitPriceConfig:
        """Get configured unit prices, keyed by channel id."""
        pass

    @abstractmethod
    def set_unit_price(self, channel_id: str, price: Decimal) -> None:
        """Set the unit price of one channel."""
        pass
