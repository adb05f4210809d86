"""Seed universe for the market simulator."""

from typing import Optional

from .models import AssetClass, SeedQuote

# Anchor prices for the default universe
SEED_UNIVERSE: tuple[SeedQuote, ...] = (
    # Stocks and ETFs
    SeedQuote("AAPL", 175.25, AssetClass.EQUITY),
    SeedQuote("TSLA", 241.80, AssetClass.EQUITY),
    SeedQuote("GOOGL", 140.50, AssetClass.EQUITY),
    SeedQuote("MSFT", 431.25, AssetClass.EQUITY),
    SeedQuote("SPY", 485.75, AssetClass.EQUITY),

    # Cryptocurrencies
    SeedQuote("BTC", 42000.00, AssetClass.CRYPTO),
    SeedQuote("ETH", 2850.00, AssetClass.CRYPTO),
    SeedQuote("SOL", 95.50, AssetClass.CRYPTO),

    # Stablecoins
    SeedQuote("USDT", 1.00, AssetClass.STABLECOIN),
    SeedQuote("USDC", 1.00, AssetClass.STABLECOIN),
)


def seeds_from_config(universe: Optional[list[dict]]) -> tuple[SeedQuote, ...]:
    """
    Build a seed universe from validated configuration entries.

    Args:
        universe: List of {symbol, base_price, asset_class} mappings, or None

    Returns:
        Seed tuple, the default universe when no entries are configured
    """
    if not universe:
        return SEED_UNIVERSE

    return tuple(
        SeedQuote(
            symbol=entry["symbol"].strip().upper(),
            base_price=float(entry["base_price"]),
            asset_class=AssetClass(entry.get("asset_class", AssetClass.EQUITY.value)),
        )
        for entry in universe
    )
