"""Atomic writer for package-lock.json."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from .models import PackageLock

logger = logging.getLogger(__name__)

PACKAGE_LOCK_NAME = "package-lock.json"


def render_package_lock(lock: PackageLock) -> str:
    """Return the exact JSON text written for ``lock``."""
    return json.dumps(lock.to_dict(), indent=4)


def _target_mode(destination: Path) -> int:
    """Mode of the file being replaced, or ``0o666`` less the umask for a new one."""
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_package_lock(lock: PackageLock, destination: Path | str) -> Path:
    """Write ``lock`` to ``destination`` without exposing a partial file.

    The JSON is written to a temporary file in the destination directory and
    renamed over the target. The target keeps its permissions; a new file gets
    the usual umask-derived mode rather than the temporary file's ``0600``.
    """
    destination = Path(destination)
    text = render_package_lock(lock)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, _target_mode(destination))
        os.replace(tmp_name, destination)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.info("Wrote %s (%d top-level dependencies)", destination, len(lock.dependencies))
    return destination
