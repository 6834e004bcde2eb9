"""HTTP market data provider backed by aiohttp."""

import asyncio
from datetime import date
from typing import Optional
from urllib.parse import urlparse

import aiohttp
import orjson

from ..config.defaults import ProviderParams
from ..data.models import BulkFetchResult, Series
from ..data.parsers import parse_bulk_payload, parse_json_payload, parse_symbol_payload
from ..errors import ConfigurationError, ProviderError, ProviderHTTPError, ProviderTimeoutError
from ..utils.time import format_range_date
from .base import MarketDataProvider


class HttpMarketDataProvider(MarketDataProvider):
    """Historical data over HTTP: a bulk POST endpoint and a per-symbol GET endpoint."""

    def __init__(self, config: ProviderParams, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("http")
        self.config = config

        parsed = urlparse(config.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ConfigurationError(f"Invalid provider URL: {config.base_url}")

        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpMarketDataProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=self.config.max_connections)
            # Callers bound every request with asyncio.wait_for
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=None, sock_connect=10),
                headers={
                    'Accept': 'application/json',
                    'User-Agent': self.config.user_agent,
                },
            )
            self._owns_session = True
        return self._session

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip('/') + path

    async def fetch_bulk(self, symbols: list[str], days: int) -> BulkFetchResult:
        """POST {symbols, days} to the bulk endpoint."""
        url = self._url(self.config.bulk_path)
        body = orjson.dumps({"symbols": symbols, "days": days})

        try:
            async with self._get_session().post(
                url, data=body, headers={'Content-Type': 'application/json'}
            ) as response:
                raw = await response.read()
                if not 200 <= response.status < 300:
                    self._record_request(failed=True)
                    raise ProviderHTTPError(
                        f"HTTP {response.status}: {response.reason}",
                        status=response.status,
                        endpoint=url,
                    )

        except aiohttp.ServerTimeoutError as e:
            self._record_request(failed=True)
            raise ProviderTimeoutError(f"Bulk request timed out: {e}", endpoint=url) from e

        except aiohttp.ClientError as e:
            self._record_request(failed=True)
            raise ProviderError(f"Network error: {e}", endpoint=url) from e

        self._record_request()
        return parse_bulk_payload(parse_json_payload(raw))

    async def fetch_symbol(self, symbol: str, start: date, end: date) -> Series:
        """GET daily bars for one symbol."""
        url = self._url(self.config.symbol_path)
        params = {
            'symbol': symbol,
            'startDate': format_range_date(start),
            'endDate': format_range_date(end),
        }

        try:
            async with self._get_session().get(url, params=params) as response:
                raw = await response.read()

                if response.status == 404:
                    self._record_request()
                    self.logger.warning("No data found for symbol", symbol=symbol)
                    return Series.empty(symbol)

                if not 200 <= response.status < 300:
                    self._record_request(failed=True)
                    raise ProviderHTTPError(
                        f"HTTP {response.status}: {response.reason}",
                        status=response.status,
                        endpoint=url,
                        symbol=symbol,
                    )

        except aiohttp.ServerTimeoutError as e:
            self._record_request(failed=True)
            raise ProviderTimeoutError(f"Request timed out: {e}", endpoint=url, symbol=symbol) from e

        except aiohttp.ClientError as e:
            self._record_request(failed=True)
            raise ProviderError(f"Network error: {e}", endpoint=url, symbol=symbol) from e

        self._record_request()
        return parse_symbol_payload(symbol, parse_json_payload(raw))

    async def health_check(self) -> bool:
        """Check if the provider's health endpoint answers."""
        url = self._url(self.config.health_path)

        try:
            async with self._get_session().get(
                url, timeout=aiohttp.ClientTimeout(total=self.config.health_timeout_seconds)
            ) as response:
                return 200 <= response.status < 400

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning(
                "Health check failed",
                provider=self.name,
                url=url,
                error=str(e) or type(e).__name__
            )
            return False

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
