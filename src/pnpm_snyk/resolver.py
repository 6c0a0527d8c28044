"""Project pnpm package snapshots into package-lock dependency records."""

from __future__ import annotations

from .errors import UnknownPackageError
from .models import DependencyRecord, DescriptorKind, PackageDescriptor, PnpmLockfile


def resolve(
    descriptor: PackageDescriptor,
    lockfile: PnpmLockfile,
    consumed: set[str] | None = None,
) -> DependencyRecord:
    """Return the dependency record for ``descriptor``.

    When ``consumed`` is given the descriptor's key is added to it, marking the
    snapshot as taken by root extraction. The lockfile itself is never modified.

    Raises:
        UnknownPackageError: If the key has no snapshot in ``lockfile.packages``.
    """
    snapshot = lockfile.packages.get(descriptor.full_key)
    if snapshot is None:
        raise UnknownPackageError(descriptor.full_key)

    record = DependencyRecord(version=descriptor.version)
    if snapshot.tarball is not None:
        record.resolved = snapshot.tarball

    if descriptor.kind is DescriptorKind.VERSION_CONTROL and snapshot.name is not None:
        specifier = lockfile.specifiers.get(snapshot.name)
        if specifier is not None:
            record.from_ = specifier

    # linked and local packages carry no content hash
    if snapshot.integrity is not None:
        record.integrity = snapshot.integrity

    if snapshot.dependencies is not None:
        record.requires = dict(snapshot.dependencies)

    if snapshot.dev is True:
        record.dev = True

    if consumed is not None:
        consumed.add(descriptor.full_key)
    return record
