#!/usr/bin/env python3
"""Local CLI entrypoint to run the action outside of GitHub Actions.

Usage:
  INPUT_SNYKTOKEN=... INPUT_PNPMLOCKFILEPATH=. GITHUB_EVENT_PATH=event.json \
      python scripts/scan.py

This calls the same run_action used by the Action wrapper; inputs are read
from the INPUT_* environment variables GitHub would set.
"""

from __future__ import annotations

import logging

from pnpm_snyk.action import run_action
from pnpm_snyk.action.settings import resolve_log_level


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, resolve_log_level(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_action()


if __name__ == "__main__":
    raise SystemExit(main())
