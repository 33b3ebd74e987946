"""ConversionEngine -- prices a troy-ounce USD quote in any unit and currency.

All money leaving the engine is rounded half-up to cents. Currency lookups
fail loudly with UnknownCurrencyCode; unknown weight units fall back to the
troy ounce.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from core.errors import InvalidArgument
from core.models.market import METALS
from core.models.reference import ConversionResult, Currency, WeightUnit
from core.tables import MarketTables
from pricing.rounding import round2

logger = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_amount(amount: Any) -> float:
    """Turn calculator input into a usable quantity.

    Strings are read up to the first character that cannot continue a number,
    so "12abc" is 12. Empty, non-numeric, non-finite and negative input all
    count as zero.
    """
    if amount is None or isinstance(amount, bool):
        return 0.0
    if isinstance(amount, str):
        match = _LEADING_NUMBER_RE.match(amount.strip())
        if not match:
            return 0.0
        value = float(match.group(0))
    else:
        try:
            value = float(amount)
        except (TypeError, ValueError):
            return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


class ConversionEngine:
    """Pure conversion functions bound to a set of MarketTables.

    Usage:
        engine = ConversionEngine(MarketTables.default())
        engine.convert(2650.0, "USD", "EUR", "g")        # 78.38
        engine.value_for("2", "oz", "GBP", 2650.0)      # 4187.0
    """

    def __init__(self, tables: MarketTables | None = None) -> None:
        self._tables = tables or MarketTables.default()

    @property
    def tables(self) -> MarketTables:
        return self._tables

    def convert(
        self,
        price_per_oz: float,
        from_currency: str,
        to_currency: str,
        unit: str = "oz",
    ) -> float:
        """Re-express a per-ounce price in another currency and weight unit.

        Raises UnknownCurrencyCode if either currency is not in the rate table
        and InvalidArgument for any price that is not a finite non-negative
        number.
        """
        try:
            price = float(price_per_oz)
        except (TypeError, ValueError):
            raise InvalidArgument(f"price must be a number, got {price_per_oz!r}") from None
        if not math.isfinite(price) or price < 0:
            raise InvalidArgument(f"price must be a non-negative number, got {price_per_oz!r}")

        from_rate = self._tables.rate(from_currency)
        to_rate = self._tables.rate(to_currency)

        if from_currency.strip().upper() == to_currency.strip().upper():
            price_in_target = price
        else:
            price_in_usd = price / from_rate
            price_in_target = price_in_usd * to_rate

        return round2(price_in_target * self._tables.weight_multiplier(unit))

    def value_for(self, amount: Any, unit: str, currency: str, base_price: float) -> float:
        """Value of `amount` units of metal priced at `base_price` USD per ounce.

        Equivalent to amount * weight(unit) * base_price * rate(currency),
        routed through convert() so both paths share one formula.
        """
        quantity = coerce_amount(amount)
        return self.convert(quantity * base_price, "USD", currency, unit)

    def calculate(
        self,
        metal: str,
        amount: Any,
        unit: str,
        currency: str,
        gold_price: float,
        silver_price: float,
    ) -> ConversionResult:
        """Calculator widget: value of an amount of gold or silver."""
        if metal not in METALS:
            raise InvalidArgument(f"metal must be one of {list(METALS)}, got {metal!r}")

        base_price = gold_price if metal == "gold" else silver_price
        quantity = coerce_amount(amount)
        result = ConversionResult(
            from_amount=quantity,
            from_unit=unit,
            to_amount=self.value_for(quantity, unit, currency, base_price),
            to_unit=currency.strip().upper(),
            metal=metal,
            price_per_unit=self.value_for(1, unit, currency, base_price),
        )
        logger.debug(
            "Calculated %s %s of %s = %s %s",
            quantity, unit, metal, result.to_amount, result.to_unit,
        )
        return result

    def currencies(self) -> list[Currency]:
        return list(self._tables.currencies)

    def units(self) -> list[WeightUnit]:
        return list(self._tables.units)

    def symbol_for(self, code: str) -> str:
        return self._tables.symbol_for(code)
