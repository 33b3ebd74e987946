"""Error types raised by the pricing core.

Lookup failures subclass KeyError and argument failures subclass ValueError,
so callers that already handle the builtins keep working.
"""

from __future__ import annotations


class MetalRatesError(Exception):
    """Base class for all metalrates errors."""


class UnknownCurrencyCode(MetalRatesError, KeyError):
    """A currency code is not present in the rate table."""

    def __init__(self, code: str, available: list[str] | None = None) -> None:
        self.code = code
        self.available = available or []
        super().__init__(code)

    def __str__(self) -> str:
        return f"Unknown currency code '{self.code}'. Available: {self.available}"


class UnknownUnitCode(MetalRatesError, KeyError):
    """A weight unit is not present in the conversion table."""

    def __init__(self, code: str, available: list[str] | None = None) -> None:
        self.code = code
        self.available = available or []
        super().__init__(code)

    def __str__(self) -> str:
        return f"Unknown weight unit '{self.code}'. Available: {self.available}"


class InvalidArgument(MetalRatesError, ValueError):
    """An argument is outside the accepted domain (negative days, bad metal, ...)."""
