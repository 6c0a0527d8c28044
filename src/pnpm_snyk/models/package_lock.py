"""npm ``package-lock.json`` (lockfileVersion 1) model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class SubDependencyRecord:
    """Minimal record for a transitive package nested under a root dependency."""

    version: str
    resolved: str | None = None
    integrity: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"version": self.version}
        if self.resolved is not None:
            data["resolved"] = self.resolved
        if self.integrity is not None:
            data["integrity"] = self.integrity
        return data


@dataclass(slots=True)
class DependencyRecord:
    """Top-level entry of the package-lock ``dependencies`` map.

    Unset fields are omitted from :meth:`to_dict`; consumers distinguish an
    absent field from an empty one. ``dev`` is either ``True`` or unset.
    """

    version: str
    resolved: str | None = None
    from_: str | None = None
    integrity: str | None = None
    requires: dict[str, str] | None = None
    dev: bool | None = None
    dependencies: dict[str, SubDependencyRecord] | None = None

    def to_sub_dependency(self) -> SubDependencyRecord:
        return SubDependencyRecord(
            version=self.version, resolved=self.resolved, integrity=self.integrity
        )

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"version": self.version}
        if self.resolved is not None:
            data["resolved"] = self.resolved
        if self.from_ is not None:
            data["from"] = self.from_
        if self.integrity is not None:
            data["integrity"] = self.integrity
        if self.requires is not None:
            data["requires"] = dict(self.requires)
        if self.dev:
            data["dev"] = True
        if self.dependencies is not None:
            data["dependencies"] = {
                name: sub.to_dict() for name, sub in self.dependencies.items()
            }
        return data


@dataclass(slots=True, frozen=True)
class PackageLock:
    """The assembled output document."""

    dependencies: dict[str, DependencyRecord] = field(default_factory=dict)
    requires: bool = True
    lockfile_version: int = 1

    def to_dict(self) -> dict[str, object]:
        return {
            "requires": self.requires,
            "lockfileVersion": self.lockfile_version,
            "dependencies": {
                name: record.to_dict() for name, record in self.dependencies.items()
            },
        }
