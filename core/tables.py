"""Static lookup tables -- currency rates and weight-unit conversion factors.

All rates are multipliers relative to USD; all weight factors convert one unit
into troy ounces. A single MarketTables instance is built at startup and
shared by every pricing component.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from core.errors import UnknownCurrencyCode, UnknownUnitCode
from core.models.reference import Currency, WeightUnit

logger = logging.getLogger(__name__)

CURRENCY_RATES: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "INR": 83.12,
    "AUD": 1.53,
    "CAD": 1.36,
    "JPY": 149.50,
    "CNY": 7.24,
    "CHF": 0.88,
    "AED": 3.67,
}

CURRENCIES: tuple[Currency, ...] = (
    Currency(code="USD", name="US Dollar", symbol="$"),
    Currency(code="EUR", name="Euro", symbol="€"),
    Currency(code="GBP", name="British Pound", symbol="£"),
    Currency(code="INR", name="Indian Rupee", symbol="₹"),
    Currency(code="AUD", name="Australian Dollar", symbol="A$"),
    Currency(code="CAD", name="Canadian Dollar", symbol="C$"),
    Currency(code="JPY", name="Japanese Yen", symbol="¥"),
    Currency(code="CNY", name="Chinese Yuan", symbol="¥"),
    Currency(code="CHF", name="Swiss Franc", symbol="CHF"),
    Currency(code="AED", name="UAE Dirham", symbol="د.إ"),
)

# Troy ounces per unit
WEIGHT_CONVERSIONS: dict[str, float] = {
    "oz": 1.0,
    "g": 0.0321507,
    "kg": 32.1507,
    "tola": 0.375,
    "tael": 1.20337,
}

WEIGHT_UNITS: tuple[WeightUnit, ...] = (
    WeightUnit(code="oz", name="Troy Ounce"),
    WeightUnit(code="g", name="Gram"),
    WeightUnit(code="kg", name="Kilogram"),
    WeightUnit(code="tola", name="Tola"),
    WeightUnit(code="tael", name="Tael"),
)


@dataclass(frozen=True)
class MarketTables:
    """Immutable bundle of the rate and weight tables plus their display lists.

    Usage:
        tables = MarketTables.default()
        tables.rate("EUR")                 # 0.92
        tables.weight_multiplier("g")      # 0.0321507
        tables.weight_multiplier("stone")  # 1.0 (falls back to troy ounce)
    """

    currency_rates: Mapping[str, float] = field(default_factory=lambda: dict(CURRENCY_RATES))
    weight_conversions: Mapping[str, float] = field(default_factory=lambda: dict(WEIGHT_CONVERSIONS))
    currencies: tuple[Currency, ...] = CURRENCIES
    units: tuple[WeightUnit, ...] = WEIGHT_UNITS

    def __post_init__(self) -> None:
        # Freeze the mappings so no caller can mutate shared state
        object.__setattr__(
            self, "currency_rates",
            MappingProxyType({k.upper(): float(v) for k, v in self.currency_rates.items()}),
        )
        object.__setattr__(
            self, "weight_conversions",
            MappingProxyType({k.lower(): float(v) for k, v in self.weight_conversions.items()}),
        )

    @classmethod
    def default(cls) -> MarketTables:
        return cls()

    def with_overrides(
        self,
        currency_rates: Mapping[str, float] | None = None,
        weight_conversions: Mapping[str, float] | None = None,
    ) -> MarketTables:
        """Return a new MarketTables with the given entries merged over this one.

        Codes not already listed get a bare display entry so the lookup lists
        stay in sync with the rate tables.
        """
        rates = {**self.currency_rates, **{k.upper(): v for k, v in (currency_rates or {}).items()}}
        weights = {**self.weight_conversions, **{k.lower(): v for k, v in (weight_conversions or {}).items()}}

        currencies = list(self.currencies)
        known_currencies = {c.code for c in currencies}
        for code in rates:
            if code not in known_currencies:
                currencies.append(Currency(code=code, name=code, symbol=code))

        units = list(self.units)
        known_units = {u.code for u in units}
        for code in weights:
            if code not in known_units:
                units.append(WeightUnit(code=code, name=code))

        return MarketTables(
            currency_rates=rates,
            weight_conversions=weights,
            currencies=tuple(currencies),
            units=tuple(units),
        )

    def rate(self, code: str) -> float:
        """Multiplier converting USD into `code`.

        Raises UnknownCurrencyCode if the code is not in the table.
        """
        key = (code or "").strip().upper()
        if key not in self.currency_rates:
            raise UnknownCurrencyCode(code, available=list(self.currency_rates))
        return self.currency_rates[key]

    def has_currency(self, code: str) -> bool:
        return (code or "").strip().upper() in self.currency_rates

    def weight_multiplier(self, unit: str, strict: bool = False) -> float:
        """Troy ounces per `unit`.

        Unknown units resolve to 1.0 (troy ounce) unless `strict` is set,
        in which case UnknownUnitCode is raised.
        """
        key = (unit or "").strip().lower()
        if key in self.weight_conversions:
            return self.weight_conversions[key]
        if strict:
            raise UnknownUnitCode(unit, available=list(self.weight_conversions))
        logger.warning("Unknown weight unit %r, treating as troy ounce", unit)
        return 1.0

    def currency(self, code: str) -> Currency | None:
        key = (code or "").strip().upper()
        for currency in self.currencies:
            if currency.code == key:
                return currency
        return None

    def symbol_for(self, code: str) -> str:
        """Display symbol for a currency code, falling back to the code itself."""
        currency = self.currency(code)
        return currency.symbol if currency else (code or "").strip().upper()
