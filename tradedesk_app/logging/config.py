"""
Centralized logging configuration for the TradeDesk market core.

This module provides standardized logging configuration using structlog
for all components. The simulator, the valuer and the service all log
through this configuration so tick summaries and valuation events share
one structured format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_market_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for the market price simulator.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger carrying the simulator subsystem context
    """
    return get_logger(name).bind(subsystem="market_simulator")


def log_tick_summary(
    logger: FilteringBoundLogger,
    tick_count: int,
    symbols_updated: int,
    duration_ms: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of one simulator tick with standardized fields.

    Args:
        logger: Structlog logger instance
        tick_count: Sequence number of the tick since construction
        symbols_updated: Number of quotes advanced
        duration_ms: Wall-clock duration of the tick
        context: Additional context data
    """
    bound_logger = logger.bind(
        tick_count=tick_count,
        symbols_updated=symbols_updated,
        duration_ms=round(duration_ms, 3),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Market tick applied")
