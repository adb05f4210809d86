#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

from tradedesk_app.config.loader import ConfigLoader
from tradedesk_app.config.validation import ConfigValidator, ValidationError


def validate_market_config(config_dir: Optional[Path] = None) -> List[ValidationError]:
    """Validate the merged configuration for a config directory."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating market configuration in {loader.config_dir}...")

    all_valid = True

    try:
        errors = validate_market_config(loader.config_dir)

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print("✅ market.yaml is valid")

    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        all_valid = False

    # Overrides a deployment commonly applies on top of the file
    print("\n📋 Testing override merge...")
    test_overrides = {
        "simulator": {
            "tick_interval_seconds": 3.0,
        }
    }

    try:
        config = loader.merge_config(test_overrides)
        errors = ConfigValidator.validate_config(config)

        if errors:
            print("❌ Override validation failed:")
            for error in errors:
                print(f"  • {error.field}: {error.message}")
            all_valid = False
        else:
            print("✅ Override validation passed")

    except Exception as e:
        print(f"❌ Error testing overrides: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
