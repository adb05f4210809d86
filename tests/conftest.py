"""Pytest configuration and shared fixtures."""

import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from tradedesk_app.market.models import PriceLookup, Quote
from tradedesk_app.market.simulator import PriceSimulator

FIXED_TIME = datetime(2024, 1, 2, 15, 30, 0, tzinfo=timezone.utc)


class FixedDraws:
    """Random source returning a fixed, repeating sequence of draws."""

    def __init__(self, draws: List[float]):
        self.draws = list(draws)
        self.index = 0

    def random(self) -> float:
        value = self.draws[self.index % len(self.draws)]
        self.index += 1
        return value


class StaticPriceLookup(PriceLookup):
    """Price lookup over a fixed set of quotes."""

    def __init__(self, quotes: Dict[str, Quote]):
        self.quotes = quotes
        self.calls: List[str] = []

    def get_price(self, symbol: str) -> Optional[Quote]:
        self.calls.append(symbol)
        return self.quotes.get(symbol)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant UTC timestamp."""
    return lambda: FIXED_TIME


@pytest.fixture
def fixed_draws():
    """Factory for fixed draw sequences."""
    return FixedDraws


@pytest.fixture
def seeded_simulator(fixed_clock) -> PriceSimulator:
    """Simulator over the default universe with a seeded random source."""
    return PriceSimulator(rng=random.Random(1234), clock=fixed_clock)


@pytest.fixture
def make_quote():
    """Factory for quotes with sensible defaults."""
    def _make(symbol: str = "AAPL", price: float = 175.0, change: float = 0.0,
              change_percent: float = 0.0, base_price: Optional[float] = None) -> Quote:
        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            last_update=FIXED_TIME,
            base_price=base_price if base_price is not None else price,
        )
    return _make


@pytest.fixture
def static_lookup():
    """Factory for a price lookup over fixed quotes."""
    return StaticPriceLookup


@pytest.fixture
def sample_position_records() -> List[Dict[str, Any]]:
    """Position rows in the storage layer's shape."""
    return [
        {"id": "pos-1", "userId": "user-1", "symbol": "AAPL", "quantity": "10",
         "price": "170.00", "type": "buy"},
        {"id": "pos-2", "userId": "user-1", "symbol": "BTC", "quantity": "0.5",
         "price": "40000.00", "type": "sell"},
        {"id": "pos-3", "userId": "user-1", "symbol": "NOPE", "quantity": "3",
         "price": "12.50", "type": "buy"},
    ]
