"""
Market data module.

Simulated quote table, the seed universe it starts from and the read
interface consumed by position valuation.
"""
