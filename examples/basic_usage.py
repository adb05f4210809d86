#!/usr/bin/env python3
"""
Basic Usage Example - TradeDesk Market Data Core

This script demonstrates the market data service with a shortened tick
interval. It shows how to:
- Configure logging from the loaded configuration
- Start and stop the price simulator
- Read quotes and value a small portfolio

Run: python examples/basic_usage.py
"""

import json
import random
import time

from tradedesk_app.config.defaults import config_from_dict
from tradedesk_app.config.loader import ConfigLoader
from tradedesk_app.logging import configure_logging
from tradedesk_app.service import MarketDataService

SAMPLE_POSITIONS = [
    {"id": "pos-1", "symbol": "AAPL", "quantity": "10", "price": "170.00", "type": "buy"},
    {"id": "pos-2", "symbol": "BTC", "quantity": "0.25", "price": "43000.00", "type": "sell"},
    {"id": "pos-3", "symbol": "USDT", "quantity": "500", "price": "1.00", "type": "buy"},
    {"id": "pos-4", "symbol": "DELISTED", "quantity": "5", "price": "12.00", "type": "buy"},
]


def main() -> None:
    config = config_from_dict(ConfigLoader.create().merge_config())
    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
    )

    service = MarketDataService(
        overrides={"simulator": {"tick_interval_seconds": 0.5}},
        rng=random.Random(42),
    )

    print("📈 Starting market simulator (0.5s ticks)")
    with service:
        time.sleep(2.2)

        print("\n💹 Market snapshot")
        for symbol, quote in service.get_market_snapshot().items():
            print(f"  {symbol:6} {quote['price']:>10.2f} {quote['changePercent']:+.2f}%")

        print("\n📊 Valued positions")
        for position in service.value_position_records(SAMPLE_POSITIONS):
            print(json.dumps(position, indent=2))

        summary = service.get_portfolio_summary(SAMPLE_POSITIONS)
        print("\n🧾 Portfolio summary")
        print(json.dumps(summary.to_dict(), indent=2))

    print("\n✅ Simulator stopped")


if __name__ == "__main__":
    main()
