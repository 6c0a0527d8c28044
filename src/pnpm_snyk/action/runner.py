"""Action entrypoint: convert pnpm-lock.yaml, then monitor or test it with Snyk.

On push events the project is snapshotted with ``snyk monitor``. On pull
requests ``snyk test`` runs either as a full scan or, by default, as a delta
scan that only fails on issues the pull request introduces.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections.abc import Mapping
from typing import Any

from ..core import convert_file
from ..errors import LockfileError
from ..writer import render_package_lock
from . import snyk
from .events import EVENT_PATH_ENV_VAR, EventKind, classify_event, load_event_payload
from .settings import ActionSettings, ConfigError, read_flag

logger = logging.getLogger(__name__)

_BANNER_RULE = "=" * 32


def _banner(title: str) -> None:
    print(_BANNER_RULE)
    print(title.center(len(_BANNER_RULE)).rstrip())
    print(_BANNER_RULE)


def _escape_command_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _set_failed(message: str) -> None:
    """Emit a GitHub ``::error::`` workflow command."""
    print(f"::error::{_escape_command_data(message)}")


def _full_scan(settings: ActionSettings, arguments: list[str]) -> int:
    result = snyk.run_test(arguments, settings.lockfile_dir)
    print(result.stdout)
    if result.returncode != 0:
        return 1 if settings.break_build else 0
    return 0


def _check_pull_request(
    settings: ActionSettings,
    arguments: list[str],
    converted: str,
    auth_output: str,
) -> int:
    arguments = list(arguments)
    if not settings.full_scan and "--json" not in arguments:
        arguments.insert(0, "--json")
    if settings.show_deps and "--print-deps" not in arguments:
        arguments.insert(0, "--print-deps")

    if not settings.break_build:
        _banner("NON BLOCKING MODE")

    if settings.full_scan:
        return _full_scan(settings, arguments)

    result = snyk.run_test(arguments, settings.lockfile_dir)
    if settings.debug:
        logger.debug("Converted lock file:\n%s", converted)
        logger.debug("Snyk auth:\n%s", auth_output)
        logger.debug("Snyk test (exit code %d):\n%s", result.returncode, result.stdout)

    delta = snyk.compute_delta(result.stdout, settings.lockfile_dir)
    if delta is snyk.DeltaResult.NEW_ISSUES:
        if settings.break_build:
            _set_failed("New issue(s) introduced !")
            return 1
        return 0
    if delta is snyk.DeltaResult.ERROR:
        logger.warning("Error during delta computation - defaulting to full scan")
        return _full_scan(settings, [arg for arg in arguments if arg != "--json"])
    return 0


def _run_checks(settings: ActionSettings, payload: dict[str, Any]) -> int:
    auth_output = snyk.auth(settings.snyk_token)

    lock = convert_file(settings.lockfile_path, settings.package_lock_path, missing_ok=True)
    if lock is None:
        logger.warning("No pnpm-lock.yaml in %s; nothing to scan", settings.lockfile_dir)
        return 0

    arguments = list(settings.snyk_arguments)
    if settings.snyk_organization:
        arguments.insert(0, f"--org={settings.snyk_organization}")

    event = classify_event(payload)
    if event is EventKind.PUSH:
        print(snyk.monitor(arguments, settings.lockfile_dir))
        return 0
    if event is EventKind.PULL_REQUEST:
        return _check_pull_request(settings, arguments, render_package_lock(lock), auth_output)

    logger.warning("Unexpected event type - works on PRs and Push events")
    return 0


def run_action(
    settings: ActionSettings | None = None,
    payload: dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the action and return the process exit code.

    Failures only fail the workflow when ``breakBuild`` is enabled; otherwise
    they are logged and the step passes.
    """
    environ = os.environ if environ is None else environ
    break_build = settings.break_build if settings is not None else read_flag(environ, "breakBuild")

    try:
        if settings is None:
            settings = ActionSettings.from_env(environ)
        if payload is None:
            event_path = environ.get(EVENT_PATH_ENV_VAR)
            payload = load_event_payload(event_path) if event_path else {}
        return _run_checks(settings, payload)
    except (
        LockfileError,
        ConfigError,
        snyk.SnykError,
        subprocess.SubprocessError,
        json.JSONDecodeError,
        OSError,
    ) as exc:
        logger.error("Failed Check !")
        if break_build:
            _set_failed(str(exc))
            return 1
        logger.error("%s", exc)
        return 0
