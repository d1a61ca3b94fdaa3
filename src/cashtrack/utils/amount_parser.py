"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₺123.45", "123.45 TL", "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"[₺$€£]|\b(?:TL|TRY|USD|EUR|GBP)\b", "", amount_str, flags=re.IGNORECASE)

    # Remove thousands separators and whitespace
    amount_str = amount_str.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    return -amount if is_negative else amount
