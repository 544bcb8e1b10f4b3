from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

Number = Union[Decimal, int, float, str]


def round_price(value: Number) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class CurrencyService:
    """
    Conversion from the primary store currency into the working currency.

    Exchange rates are owned by the pricing stack; the cart only needs the
    amounts expressed consistently, so a fixed rate (1 by default) is applied.
    """

    def __init__(self, rate: Number = 1):
        self.rate = Decimal(str(rate))

    def convert_from_primary_store_currency(
        self, amount: Number, target_currency: Optional[Any] = None
    ) -> Decimal:
        rate = Decimal(str(getattr(target_currency, "rate", self.rate)))
        return Decimal(str(amount)) * rate


class PriceFormatter:
    def __init__(self, currency_symbol: str = "$"):
        self.currency_symbol = currency_symbol

    def format_price(self, amount: Number) -> str:
        return f"{self.currency_symbol}{round_price(amount):,.2f}"
