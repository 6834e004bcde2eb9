#!/usr/bin/env python3
"""Run a full regime analysis against an HTTP data provider and print the results as JSON."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

import orjson
import structlog

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from regime_app.config.loader import ConfigLoader
from regime_app.engine import RegimeAnalysisEngine
from regime_app.errors import ConfigurationError
from regime_app.logging import configure_logging
from regime_app.providers import HttpMarketDataProvider

logger = structlog.get_logger("run_analysis")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Industry relative-performance analysis")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory holding settings.yaml and catalog.yaml")
    parser.add_argument("--tier", choices=["free", "basic", "pro", "enterprise"],
                        help="Provider rate tier preset")
    parser.add_argument("--base-url", help="Provider base URL, e.g. http://localhost:3000/api")
    parser.add_argument("--no-bulk", action="store_true", help="Skip the bulk endpoint")
    parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.tier:
        overrides.setdefault("fetch", {})["tier"] = args.tier
    if args.no_bulk:
        overrides.setdefault("fetch", {})["use_bulk"] = False
    if args.base_url:
        overrides.setdefault("provider", {})["base_url"] = args.base_url
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level.upper()
    if args.json_logs:
        overrides.setdefault("logging", {})["format_json"] = True
    return overrides


def print_progress(message: str, percent: float) -> None:
    print(f"[{percent:5.1f}%] {message}", file=sys.stderr)


def print_timeframe(label, analysis) -> None:
    leaders = ", ".join(entry.symbol for entry in analysis.industries[:3]) or "no data"
    print(f"  {label}: {len(analysis.industries)} industries, leaders: {leaders}", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    loader = ConfigLoader.create(args.config_dir)

    try:
        config = loader.load_config(build_overrides(args))
        catalog = loader.load_catalog()
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    async with HttpMarketDataProvider(config.provider) as provider:
        engine = RegimeAnalysisEngine(provider, config=config, catalog=catalog)
        result = await engine.run_analysis(
            progress_callback=print_progress,
            stream_callback=print_timeframe,
        )
        logger.info("Provider statistics", **provider.get_stats())

    payload = orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2)
    if args.output:
        args.output.write_bytes(payload)
        print(f"✅ Results written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(payload.decode() + "\n")

    return 0


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
