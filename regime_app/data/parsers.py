"""
Provider payload parsers.

Converts raw JSON bodies from the market data provider into normalized
Series objects. Accepts both Polygon-style short keys (t/c/v) and long
keys (timestamp/close/volume). Every Series leaves this module in
ascending timestamp order.
"""

import math
from typing import Any, Union

import orjson
import structlog

from ..errors import MalformedDataError
from .models import BulkFetchResult, PricePoint, Series

logger = structlog.get_logger(__name__)


def parse_json_payload(raw_data: Union[bytes, str]) -> Any:
    """
    Parse a raw JSON body.

    Args:
        raw_data: Raw response body

    Returns:
        Decoded JSON value

    Raises:
        MalformedDataError: If the body is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        preview = raw_data[:200] if isinstance(raw_data, str) else raw_data[:200].decode("utf-8", "replace")
        raise MalformedDataError(f"Invalid JSON: {e}", raw_data=preview, expected_format="json")


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def parse_price_point(raw: Any) -> PricePoint:
    """
    Parse one provider bar into a PricePoint.

    Raises:
        MalformedDataError: If timestamp or close is missing, or a value is not a finite number
    """
    if not isinstance(raw, dict):
        raise MalformedDataError("Price bar must be an object", raw_data=str(raw)[:200])

    timestamp = _first_present(raw, "t", "timestamp")
    close = _first_present(raw, "c", "close")
    volume = _first_present(raw, "v", "volume")

    if timestamp is None or close is None:
        raise MalformedDataError(
            "Price bar missing timestamp or close",
            raw_data=str(raw)[:200],
            expected_format="{t|timestamp, c|close, v|volume}"
        )

    try:
        close_value = float(close)
        volume_value = float(volume) if volume is not None else 0.0
        if not math.isfinite(close_value) or not math.isfinite(volume_value):
            raise MalformedDataError("Non-finite price bar value", raw_data=str(raw)[:200])

        return PricePoint(
            timestamp=int(timestamp),
            close=close_value,
            volume=int(volume_value),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedDataError(f"Non-numeric price bar field: {e}", raw_data=str(raw)[:200])


def parse_symbol_payload(symbol: str, payload: Any) -> Series:
    """
    Parse a per-symbol historical response.

    Args:
        symbol: Ticker the payload belongs to
        payload: Decoded body, {"results": [...]} or a bare list of bars

    Returns:
        Normalized Series; bars that fail to parse are dropped

    Raises:
        MalformedDataError: If the payload has no usable results list
    """
    if isinstance(payload, list):
        raw_points = payload
    elif isinstance(payload, dict):
        raw_points = payload.get("results")
        if raw_points is None:
            # Polygon omits "results" entirely when there are no bars
            if payload.get("resultsCount") == 0:
                return Series.empty(symbol)
            raise MalformedDataError(
                f"Response for {symbol} has no results field",
                symbol=symbol,
                raw_data=str(payload)[:200],
                expected_format="{results: [...]}"
            )
        if not isinstance(raw_points, list):
            raise MalformedDataError(f"Results for {symbol} must be a list", symbol=symbol,
                                     raw_data=str(raw_points)[:200])
    else:
        raise MalformedDataError(f"Unexpected payload type for {symbol}: {type(payload).__name__}", symbol=symbol)

    points = []
    skipped = 0
    for raw in raw_points:
        try:
            points.append(parse_price_point(raw))
        except MalformedDataError:
            skipped += 1

    if skipped:
        logger.warning("Dropped malformed price bars", symbol=symbol, skipped=skipped, kept=len(points))

    return Series.from_points(symbol, points)


def parse_bulk_payload(payload: Any) -> BulkFetchResult:
    """
    Parse the bulk endpoint response.

    Expected shape: {"success": bool, "data": {symbol: {...}}, "stats": {...}}.
    A symbol whose entry is malformed is left out of the result.

    Raises:
        MalformedDataError: If the envelope itself is malformed
    """
    if not isinstance(payload, dict):
        raise MalformedDataError("Bulk response must be an object", raw_data=str(payload)[:200])

    success = payload.get("success")
    if not isinstance(success, bool):
        raise MalformedDataError("Bulk response missing boolean 'success'", raw_data=str(payload)[:200])

    if not success:
        return BulkFetchResult(success=False)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise MalformedDataError("Bulk response missing 'data' object", raw_data=str(payload)[:200])

    series_map = {}
    for symbol, entry in data.items():
        try:
            series_map[symbol] = parse_symbol_payload(symbol, entry)
        except MalformedDataError as e:
            logger.warning("Skipping malformed bulk entry", symbol=symbol, error=str(e))

    stats = payload.get("stats") if isinstance(payload.get("stats"), dict) else {}
    requested = stats.get("requested", len(data))
    successful = stats.get("successful", len(series_map))

    return BulkFetchResult(
        success=True,
        data=series_map,
        requested=requested if isinstance(requested, int) else len(data),
        successful=successful if isinstance(successful, int) else len(series_map),
    )
