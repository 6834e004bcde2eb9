#!/usr/bin/env python3
"""Configuration validation script."""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from regime_app.config.loader import ConfigLoader
from regime_app.config.validation import ConfigValidator
from regime_app.data.universe import build_universe
from regime_app.errors import ConfigurationError


def main():
    """Main validation function."""
    parser = argparse.ArgumentParser(description="Validate a regime_app config directory")
    parser.add_argument("config_dir", nargs="?", type=Path, default=None)
    args = parser.parse_args()

    loader = ConfigLoader.create(args.config_dir)
    print(f"🔍 Validating configuration in {loader.config_dir}...")

    all_valid = True

    print("\n⚙️  Validating settings...")
    try:
        errors = ConfigValidator.validate_config(loader.merge_config())
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            config = loader.load_config()
            labels = ", ".join(f"{tf.label} ({tf.lookback_days}d)" for tf in config.analysis.timeframes)
            print(f"✅ Settings are valid; timeframes: {labels}")
            print(f"   batch_size={config.fetch.batch_size} "
                  f"max_concurrent_batches={config.fetch.max_concurrent_batches} "
                  f"group_delay_ms={config.fetch.group_delay_ms}")
    except ConfigurationError as e:
        print(f"❌ {e}")
        all_valid = False

    print("\n📋 Validating catalog...")
    try:
        catalog = loader.load_catalog()
        universe = build_universe(catalog, catalog.benchmark)
        print(f"✅ {len(catalog)} instruments, benchmark {catalog.benchmark}, {len(universe)} unique symbols")
    except ConfigurationError as e:
        print(f"❌ {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
