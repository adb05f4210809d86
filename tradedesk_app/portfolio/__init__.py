"""
Portfolio valuation module.

Structured position records, boundary normalization of upstream rows, and
valuation of positions against the latest simulated quotes.
"""
