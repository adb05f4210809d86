"""Default configuration parameters for the market simulator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulatorParams:
    """Random walk and scheduling parameters."""
    tick_interval_seconds: float = 30.0     # Period between ticks
    reversion_factor: float = 0.1           # Share of anchor deviation pulled back per tick
    max_step_pct: float = 0.005             # Per-tick move cap (fraction of price)
    min_price: float = 0.01                 # Price floor
    price_decimals: int = 2                 # Stored precision of price/change fields


@dataclass(frozen=True)
class VolatilityParams:
    """Per asset class half-width of the uniform random component."""
    stablecoin: float = 0.00005
    crypto: float = 0.003
    equity: float = 0.002

    def for_asset_class(self, asset_class: str) -> float:
        """Volatility for an asset class name, equity when unrecognized."""
        return getattr(self, asset_class, self.equity)


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    simulator: SimulatorParams
    volatility: VolatilityParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        simulator=SimulatorParams(),
        volatility=VolatilityParams(),
        logging=LoggingParams(),
    )


def config_from_dict(config: dict) -> DefaultConfig:
    """Build a typed configuration from a merged configuration dict."""
    return DefaultConfig(
        simulator=SimulatorParams(**config.get("simulator", {})),
        volatility=VolatilityParams(**config.get("volatility", {})),
        logging=LoggingParams(**config.get("logging", {})),
    )
