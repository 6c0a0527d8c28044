"""Wrap the reshaped root map into the package-lock envelope."""

from __future__ import annotations

from .models import DependencyRecord, PackageLock


def assemble(root_map: dict[str, DependencyRecord]) -> PackageLock:
    return PackageLock(dependencies=root_map, requires=True, lockfile_version=1)
