"""GitHub Action wrapper: convert the lockfile, then scan it with Snyk."""

from .events import EventKind, classify_event, load_event_payload
from .runner import run_action
from .settings import ActionSettings, ConfigError, validate_snyk_args, validate_snyk_token
from .snyk import DeltaResult, SnykError

__all__ = [
    "ActionSettings",
    "ConfigError",
    "DeltaResult",
    "EventKind",
    "SnykError",
    "classify_event",
    "load_event_payload",
    "run_action",
    "validate_snyk_args",
    "validate_snyk_token",
]
