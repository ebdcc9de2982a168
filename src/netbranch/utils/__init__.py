"""Utility functions for netbranch."""

from netbranch.utils.date_parser import parse_date, to_date
from netbranch.utils.amount_parser import parse_amount

__all__ = ["parse_date", "to_date", "parse_amount"]
