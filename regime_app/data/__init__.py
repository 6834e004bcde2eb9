"""
Market data module.

Holds the instrument catalog, canonical price series models, provider
payload parsing, the TTL series cache and the series fetcher.
"""
