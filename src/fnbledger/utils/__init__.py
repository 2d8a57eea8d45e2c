"""Utility functions for fnbledger."""

from fnbledger.utils.date_parser import parse_date, get_date_range
from fnbledger.utils.amount_parser import parse_amount, safe_number, to_decimal

__all__ = ["parse_date", "get_date_range", "parse_amount", "safe_number", "to_decimal"]
