#!/usr/bin/env python3
"""Main entry point for updating merkle URLs in a values file."""

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_RAW_PREFIX
from .models import RewriteResult, UpdaterError
from .rewriter import update_values_file
from .scanner import scan_cycle_dir


class ArgumentParser(argparse.ArgumentParser):
    """Reports bad flags as UpdaterError instead of exiting with code 2."""

    def error(self, message):
        raise UpdaterError(message)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = ArgumentParser(
        description="Point merkle file URLs in a values file at a new cycle"
    )
    parser.add_argument(
        "--values",
        type=Path,
        help="Path to core/reward-service/api/public/values.yaml",
    )
    parser.add_argument("--cycle-dir", type=Path, help="Path to the cycle-N directory")
    parser.add_argument(
        "--raw-prefix",
        default=DEFAULT_RAW_PREFIX,
        help=f"Raw file URL prefix (default: {DEFAULT_RAW_PREFIX})",
    )
    return parser.parse_args(argv)


def run(args) -> RewriteResult:
    if not args.values or not args.cycle_dir:
        raise UpdaterError("missing --values or --cycle-dir")

    scan = scan_cycle_dir(args.cycle_dir)
    print(f"Cycle {scan.cycle}: {len(scan.pairs)} chain/type pairs in {args.cycle_dir}")

    result = update_values_file(args.values, scan, args.raw_prefix)
    if result.changed:
        print(f"Updated {args.values.name} via URL string replacement only.")
    else:
        print(f"No changes made to {args.values.name} (nothing matched).")
    return result


def main(argv=None):
    """Main entry point."""
    try:
        run(parse_args(argv))
    except (UpdaterError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
