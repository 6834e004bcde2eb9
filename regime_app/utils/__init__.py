"""
Utility functions module.

Date helpers shared by the fetcher and the command line scripts.

Date Semantics:
- Lookback windows are expressed in trading days
- Provider requests are expressed in calendar days, padded for weekends
- "Today" is the UTC calendar date unless a clock is injected
"""
