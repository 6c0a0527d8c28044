"""Action input loader.

GitHub passes each ``with:`` input of the workflow step to the action as an
``INPUT_<NAME>`` environment variable (name upper-cased). This module reads
those variables into an :class:`ActionSettings` and validates the values that
end up on a Snyk command line.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

LOG_LEVEL_ENV_VAR = "PNPM_SNYK_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "y"}
_TOKEN_FORBIDDEN = re.compile(r"[^a-f0-9-]")
_ARG_FORBIDDEN = re.compile(r'[^a-zA-Z0-9_=."/-]')


class ConfigError(RuntimeError):
    """Raised when the action inputs are missing or invalid."""


def _input(environ: Mapping[str, str], name: str, default: str = "") -> str:
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, default).strip()


def read_flag(environ: Mapping[str, str], name: str) -> bool:
    """Return True when the boolean input ``name`` is set to a truthy value."""
    return _input(environ, name).lower() in _TRUTHY


def validate_snyk_token(token: str) -> str:
    """Return ``token`` if it only contains lowercase hex digits and dashes."""
    if _TOKEN_FORBIDDEN.search(token):
        raise ConfigError("Unauthorized characters in snyk token")
    return token


def validate_snyk_args(arguments: str) -> tuple[str, ...]:
    """Split whitespace-separated Snyk arguments, rejecting shell-unsafe characters."""
    tokens = tuple(arguments.split())
    for token in tokens:
        if _ARG_FORBIDDEN.search(token):
            raise ConfigError(f"Unauthorized characters in snyk args: {token!r}")
    return tokens


@dataclass(slots=True, frozen=True)
class ActionSettings:
    """Validated action inputs."""

    snyk_token: str
    snyk_organization: str
    lockfile_dir: Path
    debug: bool = False
    show_deps: bool = False
    snyk_arguments: tuple[str, ...] = ()
    full_scan: bool = False
    break_build: bool = False

    @property
    def lockfile_path(self) -> Path:
        return self.lockfile_dir / "pnpm-lock.yaml"

    @property
    def package_lock_path(self) -> Path:
        return self.lockfile_dir / "package-lock.json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ActionSettings:
        """Build settings from ``INPUT_*`` variables (default: ``os.environ``).

        Raises:
            ConfigError: If the token is missing or any value fails validation.
        """
        environ = os.environ if environ is None else environ

        token = _input(environ, "snykToken")
        if not token:
            raise ConfigError("Missing required input 'snykToken'")
        validate_snyk_token(token)

        organization = _input(environ, "snykOrganization")
        if organization and _ARG_FORBIDDEN.search(organization):
            raise ConfigError("Unauthorized characters in snyk organization")

        return cls(
            snyk_token=token,
            snyk_organization=organization,
            lockfile_dir=Path(_input(environ, "pnpmLockfilePath", ".") or "."),
            debug=read_flag(environ, "debugMode"),
            show_deps=read_flag(environ, "showDepsInfo"),
            snyk_arguments=validate_snyk_args(_input(environ, "snykArguments")),
            full_scan=read_flag(environ, "fullScan"),
            break_build=read_flag(environ, "breakBuild"),
        )


def resolve_log_level(
    settings: ActionSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the log level name: debug mode wins, then ``PNPM_SNYK_LOG_LEVEL``, then INFO."""
    if settings is not None and settings.debug:
        return "DEBUG"
    environ = os.environ if environ is None else environ
    return (environ.get(LOG_LEVEL_ENV_VAR) or "INFO").strip().upper()
