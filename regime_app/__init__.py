"""
Regime App - Industry Relative-Performance Analysis

Fetches historical price series for a universe of industry ETFs and their
holdings from a rate-limited market data provider, ranks each ETF against a
benchmark and each holding against its ETF, and streams the results for
several lookback windows.
"""

__version__ = "0.1.0"
__author__ = "Regime Team"
