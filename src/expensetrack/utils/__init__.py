"""Utility functions for expensetrack."""

from expensetrack.utils.date_parser import parse_timestamp, timeframe_cutoff
from expensetrack.utils.amount_parser import parse_amount

__all__ = ["parse_timestamp", "timeframe_cutoff", "parse_amount"]
