"""Thin wrapper around the Snyk CLI and snyk-delta, run through ``npx``."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from enum import IntEnum
from pathlib import Path

logger = logging.getLogger(__name__)

NPX = "npx"


class SnykError(RuntimeError):
    """Raised when a Snyk command cannot be launched or fails unexpectedly."""


class DeltaResult(IntEnum):
    """snyk-delta exit statuses."""

    NO_NEW_ISSUES = 0
    NEW_ISSUES = 1
    ERROR = 2


def _run(
    command: Sequence[str],
    cwd: Path | None = None,
    stdin: str | None = None,
) -> subprocess.CompletedProcess[str]:  # pragma: no cover - patched in tests
    try:
        return subprocess.run(
            list(command),
            cwd=cwd,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise SnykError(f"Failed to run {command[0]}: {exc}") from exc


def _snyk(
    subcommand: str, arguments: Sequence[str], cwd: Path | None = None
) -> subprocess.CompletedProcess[str]:
    command = [NPX, "snyk", subcommand, *arguments]
    logger.debug("Running %s", " ".join(command))
    return _run(command, cwd=cwd)


def auth(token: str) -> str:
    """Authenticate the Snyk CLI and return its output."""
    result = _run([NPX, "snyk", "auth", token])
    if result.returncode != 0:
        raise SnykError(
            f"snyk auth failed with exit code {result.returncode}: {result.stderr.strip()}"
        )
    return result.stdout


def monitor(arguments: Sequence[str], cwd: Path) -> str:
    """Snapshot the project in Snyk; raise on failure."""
    result = _snyk("monitor", arguments, cwd)
    if result.returncode != 0:
        raise SnykError(
            f"snyk monitor failed with exit code {result.returncode}:\n"
            f"{result.stdout}{result.stderr}"
        )
    return result.stdout


def run_test(arguments: Sequence[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run ``snyk test``; the caller decides what a non-zero exit means."""
    return _snyk("test", arguments, cwd)


def compute_delta(json_report: str, cwd: Path) -> DeltaResult:
    """Feed a ``snyk test --json`` report to snyk-delta and map its exit status."""
    result = _run([NPX, "snyk-delta"], cwd=cwd, stdin=json_report)
    if result.stdout:
        logger.info("%s", result.stdout.rstrip())
    try:
        return DeltaResult(result.returncode)
    except ValueError:
        logger.warning("snyk-delta exited with unexpected status %d", result.returncode)
        return DeltaResult.ERROR
