"""Reshape a pnpm package graph into the package-lock v1 layout.

pnpm keeps one flat ``packages`` map keyed by path-encoded identifiers; npm
lockfile v1 keeps one record per top-level name and nests other versions of a
name under the package that requires them. The conversion runs in three phases:

1. root extraction: the project's direct dependencies, bucket by bucket in
   :data:`DEPENDENCY_KINDS` order, become root records;
2. transitive classification: every remaining package either takes a free
   top-level name or is staged under its full key;
3. requires rewriting: each root's ``requires`` entries are matched against the
   staged packages (nested under the root) or the other roots (version-checked).
"""

from __future__ import annotations

import logging

from .errors import InconsistentGraphError, UnknownPackageError
from .models import DependencyRecord, DescriptorKind, PnpmLockfile
from .models.pnpm_lockfile import DEPENDENCY_FIELDS
from .parsers.identifier import parse_dependency, parse_key
from .resolver import resolve

logger = logging.getLogger(__name__)

# Later kinds win when a name is declared in more than one bucket.
DEPENDENCY_KINDS: tuple[str, ...] = DEPENDENCY_FIELDS


def extract_roots(
    lockfile: PnpmLockfile,
    kinds: tuple[str, ...] = DEPENDENCY_KINDS,
) -> tuple[dict[str, DependencyRecord], set[str]]:
    """Build the root map from the direct dependency buckets.

    Returns the root map and the set of package keys it consumed. A root that
    is displaced by a later bucket gives its key back, so Phase 2 still sees it.
    """
    root_map: dict[str, DependencyRecord] = {}
    root_keys: dict[str, str] = {}
    consumed: set[str] = set()

    for kind in kinds:
        for name, specifier in lockfile.dependency_kind(kind).items():
            descriptor = parse_dependency(name, specifier)
            record = resolve(descriptor, lockfile, consumed)

            previous = root_keys.get(descriptor.name)
            root_keys[descriptor.name] = descriptor.full_key
            root_map[descriptor.name] = record
            if previous is not None and previous not in root_keys.values():
                logger.debug("%s from %s overrides %s", descriptor.name, kind, previous)
                consumed.discard(previous)

    return root_map, consumed


def classify_transitives(
    lockfile: PnpmLockfile,
    root_map: dict[str, DependencyRecord],
    consumed: set[str],
) -> dict[str, DependencyRecord]:
    """Stage remaining packages whose name is taken; promote the rest.

    ``root_map`` is updated in place with promoted packages. Returns the staging
    map keyed by full package key.
    """
    staging: dict[str, DependencyRecord] = {}
    for key in lockfile.packages:
        if key in consumed:
            continue
        descriptor = parse_key(key)
        record = resolve(descriptor, lockfile)
        if descriptor.name in root_map:
            staging[descriptor.full_key] = record
        else:
            root_map[descriptor.name] = record
    return staging


def rewrite_requires(
    root_map: dict[str, DependencyRecord],
    staging: dict[str, DependencyRecord],
) -> set[str]:
    """Nest staged packages under the roots requiring them.

    Returns the staged keys that were nested at least once.

    Raises:
        UnknownPackageError: If a requirement is neither staged nor a root.
        InconsistentGraphError: If a requirement disagrees with the root's version.
    """
    claimed: set[str] = set()
    for root_name, record in root_map.items():
        if record.requires is None:
            continue
        for name, specifier in list(record.requires.items()):
            descriptor = parse_dependency(name, specifier)
            staged = staging.get(descriptor.full_key)
            if staged is not None:
                if record.dependencies is None:
                    record.dependencies = {}
                record.dependencies[name] = staged.to_sub_dependency()
                claimed.add(descriptor.full_key)
            else:
                root = root_map.get(name)
                if root is None:
                    raise UnknownPackageError(descriptor.full_key, required_by=root_name)
                if root.version != descriptor.version:
                    raise InconsistentGraphError(
                        descriptor.full_key,
                        required_by=root_name,
                        expected=descriptor.version,
                        actual=root.version,
                    )

            # npm has no notion of peer suffixes or registry prefixes
            if descriptor.extra is not None or descriptor.kind is DescriptorKind.URI:
                record.requires[name] = descriptor.version
    return claimed


def reshape(
    lockfile: PnpmLockfile,
    kinds: tuple[str, ...] = DEPENDENCY_KINDS,
) -> dict[str, DependencyRecord]:
    """Run all three phases and return the root map."""
    root_map, consumed = extract_roots(lockfile, kinds)
    logger.debug("Extracted %d root dependencies", len(root_map))

    staging = classify_transitives(lockfile, root_map, consumed)
    logger.debug(
        "Classified %d packages: %d roots, %d staged",
        len(lockfile.packages),
        len(root_map),
        len(staging),
    )

    claimed = rewrite_requires(root_map, staging)
    orphans = sorted(set(staging) - claimed)
    if orphans:
        logger.warning(
            "%d transitive package(s) are not required by any top-level dependency: %s",
            len(orphans),
            ", ".join(orphans),
        )
    return root_map
