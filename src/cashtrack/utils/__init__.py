"""Utility functions for cashtrack."""

from cashtrack.utils.date_parser import parse_date
from cashtrack.utils.amount_parser import parse_amount
from cashtrack.utils.formatting import format_money

__all__ = ["parse_date", "parse_amount", "format_money"]
