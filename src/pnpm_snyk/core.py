"""Core conversion entrypoints.

This module MUST NOT contain GitHub-specific dependencies so it can be used by
both the Action wrapper and the standalone CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .assembler import assemble
from .errors import SourceNotFoundError
from .models import PackageLock, PnpmLockfile
from .parsers.pnpm_lock import load_pnpm_lockfile
from .reshaper import reshape
from .writer import write_package_lock

logger = logging.getLogger(__name__)


def convert(lockfile: PnpmLockfile) -> PackageLock:
    """Convert a parsed pnpm lockfile into a package-lock document.

    Raises:
        ConversionError: On the first malformed key, unknown package or
            inconsistent requirement. Nothing is returned in that case.
    """
    return assemble(reshape(lockfile))


def convert_file(
    source: str | Path,
    destination: str | Path,
    *,
    missing_ok: bool = False,
    validate: bool = False,
) -> PackageLock | None:
    """Convert the pnpm lockfile at ``source`` and write it to ``destination``.

    Params:
        source: path or http(s) URL of ``pnpm-lock.yaml``
        destination: path of the ``package-lock.json`` to write
        missing_ok: if True, a missing source returns None instead of raising
        validate: if True, check the result against the package-lock schema
            before writing

    The destination is only written once the whole conversion has succeeded.
    """
    try:
        lockfile = load_pnpm_lockfile(source)
    except SourceNotFoundError:
        if not missing_ok:
            raise
        logger.info("No lockfile at %s; nothing to convert", source)
        return None

    lock = convert(lockfile)

    if validate:
        from .validators.package_lock import validate_package_lock

        validate_package_lock(lock.to_dict())

    write_package_lock(lock, destination)
    return lock
