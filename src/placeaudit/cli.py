"""
Place Audit — Batch CLI
=======================
Thin wrapper around the placeaudit library.

Usage:
    placeaudit                          # settings from ./config.json
    placeaudit --config audit.json -v   # explicit config, debug logging
    placeaudit --input places.csv --strict

The config path can also be given with the PLACEAUDIT_CONFIG environment
variable. Two files are written per run, named after the configured
output base and the current Unix time:
    <base>_<ts>.csv       resolved records
    err_<base>_<ts>.csv   records the provider could not resolve
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from placeaudit import csvio
from placeaudit.config import load_config
from placeaudit.exceptions import (
    ConfigInvalid,
    ConfigNotFound,
    InputInvalid,
    InputNotFound,
    InputUnreadable,
)
from placeaudit.pipeline import run
from placeaudit.providers import build_provider
from placeaudit.reconcile import Reconciler

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="placeaudit",
        description="Audit place descriptions against a geocoding service.",
    )
    parser.add_argument(
        "--config", help="JSON settings file (default: $PLACEAUDIT_CONFIG "
        "or ./config.json)"
    )
    parser.add_argument("--input", help="override the configured input CSV")
    parser.add_argument(
        "--output-base", help="override the configured output file base name"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on unparsable coordinates instead of using 0.0",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="debug logging"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point. Returns the process exit code."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # -- Configuration --------------------------------------------------
    try:
        config = load_config(args.config)
        overrides: dict = {}
        if args.input:
            overrides["input_file"] = args.input
        if args.output_base:
            overrides["output_file"] = args.output_base
        if args.strict:
            overrides["strict_coordinates"] = True
        config = replace(config, **overrides)
        provider = build_provider(config)
    except (ConfigNotFound, ConfigInvalid) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    # -- Input ----------------------------------------------------------
    try:
        records = csvio.read_input(
            config.input_file, strict=config.strict_coordinates
        )
    except (InputNotFound, InputUnreadable, InputInvalid) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    # -- Reconcile ------------------------------------------------------
    reconciler = Reconciler(
        provider, config.confidence_threshold, config.countries
    )
    result = run(records, reconciler)

    # -- Output ---------------------------------------------------------
    base = Path(config.output_file)
    out_path, err_path = csvio.output_paths(
        base.name, int(time.time()), base.parent
    )
    try:
        csvio.write_run(result.successes, result.errors, out_path, err_path)
    except OSError as exc:
        print(f"Error: cannot write output: {exc}", file=sys.stderr)
        return 1

    print(
        f"{len(result.successes)} resolved "
        f"({result.low_confidence} low confidence) -> {out_path}"
    )
    print(f"{len(result.errors)} failed -> {err_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
