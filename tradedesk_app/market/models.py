"""
Canonical data models for simulated market quotes.

Quotes are immutable; every tick publishes a fresh Quote per symbol so
readers never observe a partially written record.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_timestamp


class AssetClass(str, Enum):
    """Volatility bucket for a tradable symbol."""
    EQUITY = "equity"
    CRYPTO = "crypto"
    STABLECOIN = "stablecoin"


@dataclass(frozen=True)
class SeedQuote:
    """Static seed entry for one symbol of the simulated universe."""
    symbol: str
    base_price: float
    asset_class: AssetClass = AssetClass.EQUITY


@dataclass(frozen=True)
class Quote:
    """Current simulated price snapshot for one symbol."""
    symbol: str
    price: float              # Current simulated price, never below the floor
    change: float             # price - previous price, last tick
    change_percent: float     # change / previous price * 100
    last_update: datetime     # UTC time of last mutation
    base_price: float         # Mean reversion anchor, fixed for the process lifetime

    @classmethod
    def initial(cls, seed: SeedQuote, timestamp: datetime) -> "Quote":
        """Create the starting quote for a seed entry."""
        return cls(
            symbol=seed.symbol,
            price=seed.base_price,
            change=0.0,
            change_percent=0.0,
            last_update=timestamp,
            base_price=seed.base_price,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the HTTP layer."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change": self.change,
            "changePercent": self.change_percent,
            "lastUpdate": format_timestamp(self.last_update),
            "basePrice": self.base_price,
        }


class PriceLookup(ABC):
    """Read capability over the latest quotes."""

    @abstractmethod
    def get_price(self, symbol: str) -> Optional[Quote]:
        """
        Get the latest quote for a symbol.

        Args:
            symbol: Tradable symbol

        Returns:
            Current quote, or None when the symbol is unknown
        """
        pass
