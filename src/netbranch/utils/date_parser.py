"""Date parsing utilities."""

from datetime import date, datetime
from numbers import Real
from typing import Union

from dateutil import parser as date_parser

from netbranch.domain.errors import InvalidArgument, invalid_date_bound

DateLike = Union[date, datetime, int, float, str]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    History pages render dates as "m/d/yyyy"; anything dateutil understands
    is accepted.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    try:
        return date_parser.parse(date_str.strip()).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def to_date(value: DateLike, name: str = "date") -> date:
    """Normalize a caller-supplied date bound to a calendar date.

    Accepts a date, a datetime, a POSIX timestamp (local time) or a date
    string.

    Raises:
        InvalidArgument: If the value is missing or cannot be interpreted
    """
    if value is None:
        raise InvalidArgument(invalid_date_bound(name, value))

    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, Real) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value).date()
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidArgument(invalid_date_bound(name, value)) from e
    if isinstance(value, str):
        try:
            return parse_date(value)
        except ValueError as e:
            raise InvalidArgument(invalid_date_bound(name, value)) from e

    raise InvalidArgument(invalid_date_bound(name, value))
