"""Shared fixtures for metalrates tests."""

from __future__ import annotations

import itertools
from datetime import date, datetime, timezone

import pytest

from core.tables import MarketTables
from pricing.conversion import ConversionEngine
from pricing.generator import SyntheticSeriesGenerator

FIXED_TODAY = date(2024, 11, 15)
FIXED_NOW = datetime(2024, 11, 15, 12, 30, tzinfo=timezone.utc)


class ScriptedRandom:
    """RandomSource that replays a fixed sequence of draws, cycling forever."""

    def __init__(self, values):
        self._values = itertools.cycle(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._values)


@pytest.fixture
def tables():
    return MarketTables.default()


@pytest.fixture
def engine(tables):
    return ConversionEngine(tables)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def make_generator():
    """Factory for generators pinned to FIXED_TODAY / FIXED_NOW."""
    def factory(rng=None, **kwargs):
        return SyntheticSeriesGenerator(
            rng=rng,
            today=lambda: FIXED_TODAY,
            clock=lambda: FIXED_NOW,
            **kwargs,
        )
    return factory


@pytest.fixture
def fixed_today():
    return FIXED_TODAY


@pytest.fixture
def fixed_now():
    return FIXED_NOW
