"""Locale aware number, currency and percentage formatting."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Union

from g11n.registry import G11n

Numeric = Union[int, float, Decimal, str]

DEFAULT_NUMBER = {"thousands": ",", "decimals": ".", "places": 2}
DEFAULT_CURRENCY = {
    "code": "USD #",
    "dollar": "$#",
    "cents": "#¢",
    "negative": "(#)",
    "use": "dollar",
}


class Number:
    """Formats numbers with the active locale's ``number`` and ``currency`` patterns.

    Without registered locales the US defaults apply.
    """

    def __init__(self, g11n: G11n):
        self.g11n = g11n

    def _patterns(self, key: str) -> Dict[str, Any]:
        if not self.g11n.is_enabled():
            return {}
        locale = self.g11n.current() or self.g11n.get_fallback()
        return dict(locale.get_format_patterns(key) or {})

    def format(
        self,
        number: Numeric,
        places: Optional[int] = None,
        thousands: Optional[str] = None,
        decimals: Optional[str] = None,
    ) -> str:
        """Group thousands and fix decimal places."""
        options = {**DEFAULT_NUMBER, **self._patterns("number")}
        places = options["places"] if places is None else places
        thousands = options["thousands"] if thousands is None else thousands
        decimals = options["decimals"] if decimals is None else decimals

        value = Decimal(str(number))
        quantum = Decimal(1).scaleb(-int(places))
        value = value.quantize(quantum, rounding=ROUND_HALF_UP)

        sign = "-" if value < 0 else ""
        whole, _, fraction = f"{abs(value):f}".partition(".")

        groups = []
        while len(whole) > 3:
            groups.insert(0, whole[-3:])
            whole = whole[:-3]
        groups.insert(0, whole)

        result = sign + thousands.join(groups)
        if fraction:
            result += decimals + fraction
        return result

    def currency(self, number: Numeric, **options: Any) -> str:
        """Format an amount as currency.

        Options override the locale's patterns: ``use`` picks the template key
        (``dollar`` or ``code``), ``cents`` applies to amounts under one unit,
        ``negative`` wraps negative amounts. ``#`` is replaced by the amount.
        """
        options = {
            **DEFAULT_NUMBER,
            **DEFAULT_CURRENCY,
            **self._patterns("number"),
            **self._patterns("currency"),
            **options,
        }
        amount = Decimal(str(number))
        use = options["use"]

        if abs(amount) < 1 and amount != 0 and use != "code" and options.get("cents"):
            cents = int((abs(amount) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
            text = options["cents"].replace("#", str(cents))
        else:
            formatted = self.format(
                abs(amount), options["places"], options["thousands"], options["decimals"]
            )
            text = options.get(use, "#").replace("#", formatted)

        if amount < 0:
            text = options["negative"].replace("#", text)

        return text

    def percentage(self, number: Numeric, places: Optional[int] = None) -> str:
        """Format a number followed by a percent sign."""
        return self.format(number, places) + "%"
