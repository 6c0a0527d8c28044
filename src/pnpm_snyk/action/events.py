"""GitHub event payload helpers."""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

EVENT_PATH_ENV_VAR = "GITHUB_EVENT_PATH"


class EventKind(Enum):
    PUSH = "push"
    PULL_REQUEST = "pull_request"
    UNSUPPORTED = "unsupported"


def load_event_payload(path: Path | str | None = None) -> dict[str, Any]:
    """Return the triggering event payload, or an empty mapping when unavailable."""
    if path is None:
        env_path = os.environ.get(EVENT_PATH_ENV_VAR)
        if not env_path:
            return {}
        path = env_path

    try:
        content = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}

    payload = json.loads(content)
    return payload if isinstance(payload, dict) else {}


def classify_event(payload: dict[str, Any]) -> EventKind:
    if payload.get("commits") is not None and payload.get("head_commit"):
        return EventKind.PUSH
    if payload.get("pull_request"):
        return EventKind.PULL_REQUEST
    return EventKind.UNSUPPORTED
