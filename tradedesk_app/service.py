"""
Market data service.

Composition root for the market core: loads configuration, builds the
price simulator, owns its lifecycle and exposes the read and valuation
operations the HTTP layer consumes.
"""

import random
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import structlog

from .config.defaults import DefaultConfig, config_from_dict
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import ConfigurationError
from .market.models import Quote
from .market.seed import seeds_from_config
from .market.simulator import PriceSimulator
from .portfolio.models import PortfolioSummary, Position, ValuedPosition
from .portfolio.normalizer import PositionNormalizer
from .portfolio.valuation import summarize_positions, value_positions

logger = structlog.get_logger(__name__)


class MarketDataService:
    """
    Owns one price simulator and serves quotes and valuations.

    Construction never starts the tick thread; call start() from the
    process entry point and stop() on shutdown, or use the service as a
    context manager.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            config_dir: Directory holding market.yaml
            overrides: Explicit configuration overrides (highest priority)
            rng: Random source for the simulator

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        self.logger = logger

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        merged = self.config_loader.merge_config(overrides)

        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error("Configuration validation failed", errors=error_msgs)
            raise ConfigurationError("Invalid market configuration", errors=error_msgs)

        self.config: DefaultConfig = config_from_dict(merged)
        self.seeds = seeds_from_config(merged.get("universe"))

        self.simulator = PriceSimulator(
            seeds=self.seeds,
            params=self.config.simulator,
            volatility=self.config.volatility,
            rng=rng,
        )
        self.normalizer = PositionNormalizer()

        self.logger.info(
            "Market data service initialized",
            config_dir=str(self.config_loader.config_dir),
            symbols=len(self.seeds)
        )

    def start(self) -> None:
        """Start the simulator tick thread."""
        self.simulator.start()

    def stop(self) -> None:
        """Stop the simulator tick thread."""
        self.simulator.stop()

    def __enter__(self) -> "MarketDataService":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def get_price(self, symbol: str) -> Optional[Quote]:
        """Latest quote for a symbol, None when unknown."""
        return self.simulator.get_price(symbol.strip().upper())

    def get_all_prices(self) -> dict[str, Quote]:
        """Copy of the full quote table."""
        return self.simulator.get_all_prices()

    def get_market_snapshot(self) -> dict[str, dict[str, Any]]:
        """Serialized quotes keyed by symbol."""
        return {symbol: quote.to_dict() for symbol, quote in self.get_all_prices().items()}

    def normalize_records(self, records: Iterable[dict[str, Any]]) -> list[Position]:
        """Normalize upstream rows, dropping the ones that fail."""
        return [
            result.position
            for result in self.normalizer.normalize_records(records)
            if result.success and result.position is not None
        ]

    def value_positions(self, positions: Iterable[Position]) -> list[ValuedPosition]:
        """Value structured positions against the live quote table."""
        return value_positions(positions, self.simulator)

    def value_position_records(self, records: Iterable[dict[str, Any]]) -> list[Any]:
        """
        Value raw upstream position rows.

        Args:
            records: Position rows from storage

        Returns:
            One serialized row per input row, in input order. Rows with a
            quote carry the derived fields; rows without one, including rows
            rejected at normalization, are echoed unchanged.
        """
        records = list(records)
        results = self.normalizer.normalize_records(records)
        valued = iter(self.value_positions(
            result.position for result in results if result.success
        ))

        output = []
        for record, result in zip(records, results):
            if result.success:
                output.append(next(valued).to_dict())
            else:
                output.append(dict(record) if isinstance(record, dict) else record)
        return output

    def get_portfolio_summary(self, records: Iterable[dict[str, Any]]) -> PortfolioSummary:
        """Portfolio totals for raw upstream position rows."""
        valued = self.value_positions(self.normalize_records(records))
        return summarize_positions(valued, classify=self.simulator.asset_class)
