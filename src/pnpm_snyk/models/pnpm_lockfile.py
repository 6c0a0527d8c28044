"""pnpm lockfile (``pnpm-lock.yaml``) model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidLockfileError

DEPENDENCY_FIELDS = ("dependencies", "devDependencies", "optionalDependencies")


def _string_map(data: Any, section: str, source: str) -> dict[str, str]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidLockfileError(f"{source}: '{section}' must be a mapping")
    return {str(name): str(value) for name, value in data.items()}


@dataclass(slots=True, frozen=True)
class PackageSnapshot:
    """One resolved package from the ``packages`` section."""

    name: str | None
    resolution: dict[str, Any]
    dependencies: dict[str, str] | None = None
    dev: bool | None = None

    @property
    def integrity(self) -> str | None:
        value = self.resolution.get("integrity")
        return str(value) if value is not None else None

    @property
    def tarball(self) -> str | None:
        value = self.resolution.get("tarball")
        return str(value) if value is not None else None

    @classmethod
    def from_dict(cls, key: str, data: Any) -> PackageSnapshot:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidLockfileError(f"Package {key!r} must be a mapping")

        resolution = data.get("resolution") or {}
        if not isinstance(resolution, dict):
            raise InvalidLockfileError(f"Package {key!r} has an invalid 'resolution' field")

        dependencies = data.get("dependencies")
        if dependencies is not None:
            dependencies = _string_map(dependencies, f"packages.{key}.dependencies", "lockfile")

        name = data.get("name")
        dev = data.get("dev")
        return cls(
            name=str(name) if name is not None else None,
            resolution=dict(resolution),
            dependencies=dependencies,
            dev=dev if isinstance(dev, bool) else None,
        )


@dataclass(slots=True, frozen=True)
class PnpmLockfile:
    """Source document: direct dependency buckets, package snapshots, specifiers."""

    lockfile_version: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    optional_dependencies: dict[str, str] = field(default_factory=dict)
    packages: dict[str, PackageSnapshot] = field(default_factory=dict)
    specifiers: dict[str, str] = field(default_factory=dict)

    def dependency_kind(self, kind: str) -> dict[str, str]:
        """Return the direct dependency bucket named by its lockfile field."""
        if kind == "dependencies":
            return self.dependencies
        if kind == "devDependencies":
            return self.dev_dependencies
        if kind == "optionalDependencies":
            return self.optional_dependencies
        raise ValueError(f"Unknown dependency kind: {kind}")

    @classmethod
    def from_dict(cls, data: Any, source: str = "<memory>") -> PnpmLockfile:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidLockfileError(f"{source}: lockfile must be a mapping")

        packages_data = data.get("packages") or {}
        if not isinstance(packages_data, dict):
            raise InvalidLockfileError(f"{source}: 'packages' must be a mapping")

        version = data.get("lockfileVersion")
        return cls(
            lockfile_version=str(version) if version is not None else None,
            dependencies=_string_map(data.get("dependencies"), "dependencies", source),
            dev_dependencies=_string_map(data.get("devDependencies"), "devDependencies", source),
            optional_dependencies=_string_map(
                data.get("optionalDependencies"), "optionalDependencies", source
            ),
            packages={
                str(key): PackageSnapshot.from_dict(str(key), value)
                for key, value in packages_data.items()
            },
            specifiers=_string_map(data.get("specifiers"), "specifiers", source),
        )
