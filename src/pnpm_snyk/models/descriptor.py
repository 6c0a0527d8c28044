"""Structured form of a pnpm package key."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DescriptorKind(Enum):
    """Which key encoding produced a descriptor."""

    VERSION = "version"
    URI = "uri"
    VERSION_CONTROL = "version-control"


@dataclass(slots=True, frozen=True)
class PackageDescriptor:
    """Decoded pnpm package key.

    ``full_key`` is the key exactly as it appears in the lockfile's
    ``packages`` section and is what lookups use. ``version`` never carries the
    disambiguating suffix; that lives in ``extra``.
    """

    kind: DescriptorKind
    full_key: str
    name: str
    version: str
    extra: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError(f"Descriptor for {self.full_key!r} has an empty name")
        if not self.version:
            raise ValueError(f"Descriptor for {self.full_key!r} has an empty version")
