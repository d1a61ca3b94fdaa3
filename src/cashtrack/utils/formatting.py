"""Display formatting for money."""

from decimal import Decimal, ROUND_HALF_UP

CURRENCY_SYMBOLS = {"TRY": "₺", "USD": "$", "EUR": "€", "GBP": "£"}
CENT = Decimal("0.01")


def format_money(amount, currency: str = "TRY") -> str:
    """Format an amount with two decimals and the currency symbol, e.g. '₺1,234.50'."""
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    sign = "-" if value < 0 else ""
    if symbol is None:
        return f"{sign}{abs(value):,.2f} {currency.upper()}"
    return f"{sign}{symbol}{abs(value):,.2f}"
