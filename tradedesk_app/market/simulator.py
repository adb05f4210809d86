"""
Market price simulator.

Owns the in-memory quote table and advances it with a bounded mean-reverting
random walk. Ticks run on a dedicated background thread once start() is
called; nothing runs at import or construction time.
"""

import random
import threading
import time
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..config.defaults import SimulatorParams, VolatilityParams
from ..errors import ConfigurationError, SimulatorStateError
from ..logging.config import get_market_logger, log_tick_summary
from ..utils.time import utc_now
from .models import AssetClass, PriceLookup, Quote, SeedQuote
from .seed import SEED_UNIVERSE


def _round_within_cap(new_price: float, old_price: float, params: SimulatorParams) -> float:
    """
    Round a new price to the stored precision without breaching the step cap.

    Rounding may push a price that sits exactly on the cap one cent past it;
    in that case the rounded price steps back toward the previous price.
    """
    decimals = params.price_decimals
    step = 10 ** -decimals
    limit = old_price * params.max_step_pct + 1e-9

    rounded = round(new_price, decimals)
    if abs(rounded - old_price) > limit:
        rounded = round(rounded - step if rounded > old_price else rounded + step, decimals)
        if abs(rounded - old_price) > limit:
            rounded = old_price

    return max(rounded, params.min_price)


def advance_quote(
    quote: Quote,
    volatility: float,
    draw: float,
    params: SimulatorParams,
    timestamp: datetime,
) -> Quote:
    """
    Advance one quote by a single random walk step.

    delta = clamp((draw - 0.5) * 2 * volatility
                  + (base_price - price) * reversion_factor,
                  -max_step_pct, +max_step_pct)
    new_price = max(min_price, price * (1 + delta))

    The reversion term is an absolute price difference added to a fractional
    random term; high-priced symbols therefore saturate the cap whenever
    they drift from their anchor.

    Args:
        quote: Current quote
        volatility: Half-width of the uniform random component
        draw: Uniform sample from [0, 1)
        params: Simulator parameters
        timestamp: Time stamped on the new quote

    Returns:
        New quote; base_price is carried over unchanged
    """
    random_component = (draw - 0.5) * 2 * volatility
    mean_reversion = (quote.base_price - quote.price) * params.reversion_factor
    raw_delta = random_component + mean_reversion
    capped_delta = max(-params.max_step_pct, min(params.max_step_pct, raw_delta))

    old_price = quote.price
    new_price = max(params.min_price, old_price * (1 + capped_delta))

    change = new_price - old_price
    change_percent = change / old_price * 100

    return Quote(
        symbol=quote.symbol,
        price=_round_within_cap(new_price, old_price, params),
        change=round(change, params.price_decimals),
        change_percent=round(change_percent, params.price_decimals),
        last_update=timestamp,
        base_price=quote.base_price,
    )


class PriceSimulator(PriceLookup):
    """
    Simulated quote table for a fixed universe of symbols.

    The symbol set and anchors are fixed at construction. Only tick()
    mutates the table; readers get immutable quotes or a copied mapping.
    """

    def __init__(
        self,
        seeds: Iterable[SeedQuote] = SEED_UNIVERSE,
        params: Optional[SimulatorParams] = None,
        volatility: Optional[VolatilityParams] = None,
        rng: Optional[random.Random] = None,
        clock: Callable = utc_now,
    ) -> None:
        """
        Initialize the quote table from a seed universe.

        Args:
            seeds: Seed entries, one per symbol
            params: Random walk and scheduling parameters
            volatility: Per asset class volatility
            rng: Random source exposing random(); a fresh Random when omitted
            clock: Callable returning the timestamp for updated quotes
        """
        self.logger = get_market_logger(__name__)
        self.params = params or SimulatorParams()
        self.volatility = volatility or VolatilityParams()
        self.rng = rng or random.Random()
        self.clock = clock

        seeds = tuple(seeds)
        self._validate_seeds(seeds)

        now = self.clock()
        self._quotes: dict[str, Quote] = {s.symbol: Quote.initial(s, now) for s in seeds}
        self._base_prices: dict[str, float] = {s.symbol: s.base_price for s in seeds}
        self._asset_classes: dict[str, AssetClass] = {s.symbol: s.asset_class for s in seeds}

        # Guards publication of quotes into the table
        self._lock = threading.Lock()
        # Serializes ticks
        self._tick_lock = threading.Lock()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.tick_count = 0

        self.logger.info(
            "Market simulator initialized",
            symbols=len(self._quotes),
            tick_interval_seconds=self.params.tick_interval_seconds
        )

    @staticmethod
    def _validate_seeds(seeds: tuple[SeedQuote, ...]) -> None:
        if not seeds:
            raise ConfigurationError("Seed universe must contain at least one symbol")

        seen: set[str] = set()
        for seed in seeds:
            if seed.symbol in seen:
                raise ConfigurationError(
                    f"Duplicate seed symbol: {seed.symbol}",
                    context={"symbol": seed.symbol}
                )
            if seed.base_price <= 0:
                raise ConfigurationError(
                    f"Seed base price must be positive: {seed.symbol}",
                    context={"symbol": seed.symbol, "base_price": seed.base_price}
                )
            seen.add(seed.symbol)

    @property
    def symbols(self) -> list[str]:
        """Symbols in seed order."""
        return list(self._base_prices)

    @property
    def base_prices(self) -> dict[str, float]:
        """Copy of the mean reversion anchors."""
        return dict(self._base_prices)

    def asset_class(self, symbol: str) -> Optional[AssetClass]:
        """Asset class of a symbol, None when unknown."""
        return self._asset_classes.get(symbol)

    def volatility_for(self, symbol: str) -> float:
        """Static volatility lookup by asset class."""
        asset_class = self._asset_classes.get(symbol, AssetClass.EQUITY)
        return self.volatility.for_asset_class(asset_class.value)

    def tick(self) -> int:
        """
        Advance every quote by one random walk step.

        Called by the background thread; may also be driven directly.

        Returns:
            Number of quotes advanced
        """
        with self._tick_lock:
            started = time.perf_counter()
            timestamp = self.clock()

            for symbol in self._base_prices:
                current = self._quotes[symbol]
                updated = advance_quote(
                    current,
                    volatility=self.volatility_for(symbol),
                    draw=self.rng.random(),
                    params=self.params,
                    timestamp=timestamp,
                )
                with self._lock:
                    self._quotes[symbol] = updated

            self.tick_count += 1
            log_tick_summary(
                self.logger,
                tick_count=self.tick_count,
                symbols_updated=len(self._base_prices),
                duration_ms=(time.perf_counter() - started) * 1000
            )
            return len(self._base_prices)

    def get_price(self, symbol: str) -> Optional[Quote]:
        """Get the current quote for a symbol, None when unknown."""
        with self._lock:
            return self._quotes.get(symbol)

    def get_all_prices(self) -> dict[str, Quote]:
        """Get an independent copy of the whole quote table."""
        with self._lock:
            return dict(self._quotes)

    @property
    def is_running(self) -> bool:
        """True while the background tick thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking on a background thread at the configured interval."""
        if self.is_running:
            raise SimulatorStateError(
                "Market simulator is already running",
                current_state="running",
                attempted_operation="start"
            )

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="market-simulator",
            daemon=True
        )
        self._thread.start()

        self.logger.info(
            "Market simulator started",
            tick_interval_seconds=self.params.tick_interval_seconds
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop the background thread and wait for it to exit.

        Args:
            timeout: Maximum seconds to wait for the thread to join
        """
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout)
        self._thread = None

        self.logger.info("Market simulator stopped", tick_count=self.tick_count)

    def _run(self) -> None:
        """Tick loop; a late tick is not caught up."""
        interval = self.params.tick_interval_seconds
        while not self._stop_event.wait(interval):
            try:
                self.tick()
            except Exception as e:
                self.logger.error(
                    "Market tick failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    tick_count=self.tick_count
                )
