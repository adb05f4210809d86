"""
Logging configuration and utilities for the TradeDesk market core.
"""
from .config import configure_logging, get_logger, get_market_logger

__all__ = ["configure_logging", "get_logger", "get_market_logger"]
