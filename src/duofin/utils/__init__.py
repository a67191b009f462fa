"""Utility functions for duofin."""

from duofin.utils.date_parser import parse_date, parse_timestamp, coerce_date
from duofin.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_timestamp", "coerce_date", "parse_amount"]
