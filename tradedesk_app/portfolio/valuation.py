"""
Position valuation against the latest simulated quotes.

value_positions is pure with respect to its inputs: it reads one quote per
position at call time and never mutates positions or the quote table.
"""

from collections import defaultdict
from typing import Callable, Iterable, Optional

import structlog

from ..market.models import AssetClass, PriceLookup, Quote
from .models import PortfolioSummary, Position, PositionSide, Valuation, ValuedPosition

logger = structlog.get_logger(__name__)

UNKNOWN_ASSET_CLASS = "unknown"


def calculate_profit_loss(side: PositionSide, entry_price: float,
                          current_price: float, quantity: float) -> float:
    """
    Signed profit/loss of a position.

    buy:  (current - entry) * quantity
    sell: (entry - current) * quantity
    """
    if side == PositionSide.BUY:
        return (current_price - entry_price) * quantity
    return (entry_price - current_price) * quantity


def calculate_profit_loss_percent(profit_loss: float, entry_price: float, quantity: float) -> float:
    """
    Profit/loss as a percentage of the entry notional.

    Returns 0 when the entry price is not positive or the notional is zero.
    """
    cost_basis = entry_price * quantity
    if entry_price <= 0 or cost_basis == 0:
        return 0.0
    return profit_loss / cost_basis * 100


def value_position(position: Position, quote: Quote) -> Valuation:
    """Value a single position against a quote."""
    current_price = quote.price
    profit_loss = calculate_profit_loss(
        position.side, position.entry_price, current_price, position.quantity
    )

    return Valuation(
        current_price=current_price,
        current_value=current_price * position.quantity,
        profit_loss=profit_loss,
        profit_loss_percent=calculate_profit_loss_percent(
            profit_loss, position.entry_price, position.quantity
        ),
        market_change=quote.change,
        market_change_percent=quote.change_percent,
        last_update=quote.last_update,
    )


def value_positions(positions: Iterable[Position], price_lookup: PriceLookup) -> list[ValuedPosition]:
    """
    Attach current price, value and profit/loss to positions.

    Order is preserved and nothing is filtered. A position whose symbol has
    no quote is passed through with no valuation.

    Args:
        positions: Positions to value
        price_lookup: Source of the latest quotes

    Returns:
        One ValuedPosition per input position
    """
    valued = []
    for position in positions:
        quote = price_lookup.get_price(position.symbol)
        if quote is None:
            logger.debug("No quote for position symbol", symbol=position.symbol)
            valued.append(ValuedPosition(position=position))
            continue

        valued.append(ValuedPosition(position=position, valuation=value_position(position, quote)))

    return valued


def summarize_positions(
    valued_positions: Iterable[ValuedPosition],
    classify: Optional[Callable[[str], Optional[AssetClass]]] = None,
) -> PortfolioSummary:
    """
    Aggregate valued positions into portfolio totals.

    Only positions with a valuation contribute to totals; the symbols of the
    others are listed in unpriced_symbols.

    Args:
        valued_positions: Output of value_positions
        classify: Symbol to asset class lookup used for the value breakdown

    Returns:
        Portfolio summary
    """
    total_value = 0.0
    total_cost_basis = 0.0
    total_profit_loss = 0.0
    value_by_asset_class: dict[str, float] = defaultdict(float)
    unpriced_symbols: list[str] = []
    count = 0

    for item in valued_positions:
        count += 1
        if item.valuation is None:
            if item.position.symbol not in unpriced_symbols:
                unpriced_symbols.append(item.position.symbol)
            continue

        total_value += item.valuation.current_value
        total_cost_basis += item.position.cost_basis
        total_profit_loss += item.valuation.profit_loss

        asset_class = classify(item.position.symbol) if classify else None
        bucket = asset_class.value if asset_class is not None else UNKNOWN_ASSET_CLASS
        value_by_asset_class[bucket] += item.valuation.current_value

    total_profit_loss_percent = (
        total_profit_loss / total_cost_basis * 100 if total_cost_basis != 0 else 0.0
    )

    return PortfolioSummary(
        total_value=total_value,
        total_cost_basis=total_cost_basis,
        total_profit_loss=total_profit_loss,
        total_profit_loss_percent=total_profit_loss_percent,
        value_by_asset_class=dict(value_by_asset_class),
        position_count=count,
        unpriced_symbols=unpriced_symbols,
    )
