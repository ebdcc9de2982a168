"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a NetBranch currency string into a Decimal.

    Handles the formats the portal renders:
    - "123.45"
    - "$1,234.56"
    - "1,234.56)" (negative, trailing parenthesis)
    - "($1,234.56)" (negative in parentheses)
    - "-$123.45" (older pages)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # The portal marks negatives with a closing parenthesis; the opening one
    # is not always present in the markup.
    is_negative = False
    if amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[:-1].lstrip("(")

    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:]

    amount_str = re.sub(r"[$\s]", "", amount_str)
    amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def is_amount(text: str) -> bool:
    """Return True if text looks like a currency cell."""
    return bool(re.fullmatch(r"\(?-?\$?\s*-?[\d,]*\d(\.\d+)?\)?", text.strip()))
