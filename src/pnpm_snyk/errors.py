"""Exceptions raised while loading and converting lockfiles."""

from __future__ import annotations


class LockfileError(RuntimeError):
    """Base error for failures while loading, converting or writing a lockfile."""


class ConversionError(LockfileError):
    """Raised when the source lockfile cannot be reshaped into a package-lock."""

    def __init__(self, message: str, key: str) -> None:
        super().__init__(message)
        self.key = key


class MalformedIdentifierError(ConversionError):
    """Raised when a package key matches none of the known key grammars."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Error parsing package key {key!r}", key)


class UnknownPackageError(ConversionError):
    """Raised when a package key has no snapshot in the source lockfile."""

    def __init__(self, key: str, required_by: str | None = None) -> None:
        message = f"Failed to lookup {key!r} in packages"
        if required_by is not None:
            message += f"; used by {required_by!r}"
        super().__init__(message, key)
        self.required_by = required_by


class InconsistentGraphError(ConversionError):
    """Raised when a requirement disagrees with the resolved root version."""

    def __init__(self, key: str, required_by: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Failed to lookup {key!r} in dependencies; used by {required_by!r} "
            f"(requires {expected}, root resolves to {actual})",
            key,
        )
        self.required_by = required_by
        self.expected = expected
        self.actual = actual


class SourceNotFoundError(LockfileError):
    """Raised when the source lockfile does not exist."""

    def __init__(self, source: str) -> None:
        super().__init__(f"Lockfile not found: {source}")
        self.source = source


class InvalidLockfileError(LockfileError):
    """Raised when the source lockfile cannot be read as a pnpm lockfile."""
