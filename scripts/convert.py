#!/usr/bin/env python3
"""Convert pnpm-lock.yaml into an npm package-lock.json (lockfileVersion 1).

Usage:
  python scripts/convert.py --lockfile pnpm-lock.yaml [--output package-lock.json]
      [--validate] [--missing-ok] [--log-level DEBUG]

Exit codes: 0 converted (or skipped with --missing-ok), 1 lockfile not found,
2 lockfile could not be converted.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pnpm_snyk.action.settings import resolve_log_level
from pnpm_snyk.core import convert_file
from pnpm_snyk.errors import LockfileError, SourceNotFoundError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert pnpm-lock.yaml to package-lock.json")
    parser.add_argument("--lockfile", default="pnpm-lock.yaml", help="Path or URL of pnpm-lock.yaml")
    parser.add_argument("--output", type=Path, default=None, help="Destination package-lock.json")
    parser.add_argument("--validate", action="store_true", help="Validate against the schema")
    parser.add_argument("--missing-ok", action="store_true", help="Exit 0 if the lockfile is absent")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, (args.log_level or resolve_log_level()).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    output = args.output
    if output is None:
        source = str(args.lockfile)
        if source.startswith("http://") or source.startswith("https://"):
            output = Path("package-lock.json")
        else:
            output = Path(source).with_name("package-lock.json")

    try:
        convert_file(args.lockfile, output, missing_ok=args.missing_ok, validate=args.validate)
    except SourceNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except (LockfileError, ValueError) as exc:
        print(f"ERROR: Conversion failed: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
