"""
TradeDesk App - Simulated Market Data and Position Valuation Core

Numeric core of the trading platform back end. Maintains an in-memory table
of simulated quotes advanced by a bounded mean-reverting random walk and
values user positions against the latest quotes.
"""

__version__ = "0.1.0"
__author__ = "TradeDesk Team"
