"""Data models for pnpm lockfiles and the npm package-lock they convert into."""

from __future__ import annotations

from .descriptor import DescriptorKind, PackageDescriptor
from .package_lock import DependencyRecord, PackageLock, SubDependencyRecord
from .pnpm_lockfile import PackageSnapshot, PnpmLockfile

__all__ = [
    "DependencyRecord",
    "DescriptorKind",
    "PackageDescriptor",
    "PackageLock",
    "PackageSnapshot",
    "PnpmLockfile",
    "SubDependencyRecord",
]
