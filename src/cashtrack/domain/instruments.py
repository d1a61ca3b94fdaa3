"""Investment instruments tracked by the application.

The set of instruments is closed: each member carries its display metadata
and the rule for turning a feed quote into a price per held unit.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from cashtrack.domain.errors import ValidationError

GRAMS_PER_TROY_OUNCE = Decimal("31.1035")


class Instrument(Enum):
    """Investment instrument with its feed code and unit conversion."""

    XAU = ("Gold 24 Karat (gram)", "xau", "gram", True, Decimal("1"))
    XAU22 = ("Gold 22 Karat (gram)", "xau", "gram", True, Decimal("22") / Decimal("24"))
    XAG = ("Silver (gram)", "xag", "gram", True, Decimal("1"))
    USD = ("US Dollar", "usd", "unit", False, Decimal("1"))
    EUR = ("Euro", "eur", "unit", False, Decimal("1"))
    GBP = ("British Pound", "gbp", "unit", False, Decimal("1"))

    def __init__(self, display_name: str, feed_code: str, unit: str, quoted_per_ounce: bool, purity: Decimal):
        self.display_name = display_name
        self.feed_code = feed_code
        self.unit = unit
        self.quoted_per_ounce = quoted_per_ounce
        self.purity = purity

    @property
    def code(self) -> str:
        return self.name

    def unit_price(self, quote: Decimal) -> Decimal:
        """Convert a feed quote into a price per held unit (gram for metals)."""
        price = quote
        if self.quoted_per_ounce:
            price = price / GRAMS_PER_TROY_OUNCE
        return price * self.purity

    @classmethod
    def from_code(cls, code: str) -> "Instrument":
        """Look up an instrument by its code, case-insensitively.

        Raises:
            ValidationError: If the code is not a known instrument
        """
        try:
            return cls[code.strip().upper()]
        except (KeyError, AttributeError) as e:
            known = ", ".join(member.name for member in cls)
            raise ValidationError(f"Unknown instrument '{code}'. Known instruments: {known}") from e

    @classmethod
    def lookup(cls, code: str) -> Optional["Instrument"]:
        try:
            return cls.from_code(code)
        except ValidationError:
            return None
