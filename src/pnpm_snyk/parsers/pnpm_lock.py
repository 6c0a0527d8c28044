"""Load ``pnpm-lock.yaml`` from a path or an http(s) URL."""

from __future__ import annotations

import logging
from pathlib import Path

import requests
import yaml
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from ..errors import InvalidLockfileError, SourceNotFoundError
from ..models import PnpmLockfile

logger = logging.getLogger(__name__)

LOCKFILE_NAME = "pnpm-lock.yaml"


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=30)


def _read_url(url: str) -> str:
    response = _http_get(url)
    if response.status_code == 404:
        raise SourceNotFoundError(url)
    response.raise_for_status()
    return response.text


def _read_path(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceNotFoundError(str(path)) from exc


def parse_text(text: str, source: str = "<memory>") -> PnpmLockfile:
    """Parse lockfile YAML text into a :class:`PnpmLockfile`."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidLockfileError(f"{source}: invalid YAML: {exc}") from exc
    return PnpmLockfile.from_dict(data, source)


def load_pnpm_lockfile(source: str | Path) -> PnpmLockfile:
    """Return the parsed lockfile at ``source``.

    ``source`` is a filesystem path or an ``http(s)://`` URL.

    Raises:
        SourceNotFoundError: If the file does not exist (or the URL is a 404).
        InvalidLockfileError: If the content is not a pnpm lockfile.
        OSError / requests.RequestException: Any other read failure.
    """
    text_source = str(source)
    if text_source.startswith("http://") or text_source.startswith("https://"):
        text = _read_url(text_source)
    else:
        text = _read_path(Path(source))

    lockfile = parse_text(text, text_source)
    logger.debug(
        "Loaded %s: lockfileVersion=%s, %d packages",
        text_source,
        lockfile.lockfile_version,
        len(lockfile.packages),
    )
    return lockfile
