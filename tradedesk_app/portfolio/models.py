"""
Data models for positions and their valuations.

Positions are owned by the storage layer and consumed read-only; valuations
are derived on every call and never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_timestamp


class PositionSide(str, Enum):
    """Direction of a position."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Position:
    """A held quantity of a symbol at an entry price."""
    symbol: str
    quantity: float
    side: PositionSide
    entry_price: float
    raw: dict[str, Any] = field(default_factory=dict, compare=False)  # Upstream record, echoed as-is

    @property
    def cost_basis(self) -> float:
        """Entry notional of the position."""
        return self.entry_price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the position.

        A position normalized from an upstream record serializes as a copy of
        that record, keys and value types untouched. Positions built directly
        serialize their structured fields.
        """
        if self.raw:
            return dict(self.raw)
        return {
            "symbol": self.symbol,
            "quantity": self.quantity,
            "side": self.side.value,
            "entryPrice": self.entry_price,
        }


@dataclass(frozen=True)
class Valuation:
    """Current price, value and profit/loss of a position."""
    current_price: float
    current_value: float
    profit_loss: float
    profit_loss_percent: float
    market_change: float
    market_change_percent: float
    last_update: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPrice": self.current_price,
            "currentValue": self.current_value,
            "profitLoss": self.profit_loss,
            "profitLossPercent": self.profit_loss_percent,
            "marketChange": self.market_change,
            "marketChangePercent": self.market_change_percent,
            "lastUpdate": format_timestamp(self.last_update),
        }


@dataclass(frozen=True)
class ValuedPosition:
    """A position paired with its valuation, None when no quote exists."""
    position: Position
    valuation: Optional[Valuation] = None

    @property
    def is_valued(self) -> bool:
        return self.valuation is not None

    def to_dict(self) -> dict[str, Any]:
        """Original fields plus derived fields; unvalued positions carry none."""
        if self.valuation is None:
            return self.position.to_dict()
        return {**self.position.to_dict(), **self.valuation.to_dict()}


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate figures over a set of valued positions."""
    total_value: float
    total_cost_basis: float
    total_profit_loss: float
    total_profit_loss_percent: float
    value_by_asset_class: dict[str, float]
    position_count: int
    unpriced_symbols: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalValue": self.total_value,
            "totalCostBasis": self.total_cost_basis,
            "totalProfitLoss": self.total_profit_loss,
            "totalProfitLossPercent": self.total_profit_loss_percent,
            "valueByAssetClass": dict(self.value_by_asset_class),
            "positionCount": self.position_count,
            "unpricedSymbols": list(self.unpriced_symbols),
        }


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing one upstream position record."""

    position: Optional[Position] = None

    success: bool = True
    error_msg: Optional[str] = None

    @classmethod
    def success_with_position(cls, position: Position):
        """Create successful result with position."""
        return cls(position=position, success=True)

    @classmethod
    def error(cls, error_msg: str):
        """Create error result."""
        return cls(success=False, error_msg=error_msg)
