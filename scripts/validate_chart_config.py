#!/usr/bin/env python3
"""Validate a chart configuration file.

Loads a YAML configuration, runs the precondition checks and prints a JSON
report. The exit code is 1 when the configuration has errors.
"""

from __future__ import annotations

import argparse
import json

from chartbuilder.codec import encode_config, load_config
from chartbuilder.validator import validate_config


def main(argv: list[str] | None = None) -> int:
    """Run the configuration validator and print a JSON report."""

    parser = argparse.ArgumentParser(description="Validate a chart configuration file.")
    parser.add_argument("config", help="Path to the YAML configuration file.")
    parser.add_argument("--show-config", action="store_true", help="Include the decoded configuration in the report.")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    result = validate_config(config)
    report: dict[str, object] = {
        "config_path": args.config,
        "is_valid": result.is_valid,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
    }
    if args.show_config:
        report["config"] = encode_config(config)
    print(json.dumps(report, indent=2, sort_keys=True))

    return 0 if result.is_valid else 1


if __name__ == "__main__":
    raise SystemExit(main())
