"""Decode pnpm package keys into :class:`PackageDescriptor` values.

Keys look like::

    /@pnpm/error/1.0.0
    /@pnpm/lockfile-file/1.1.3_@pnpm+logger@2.1.1
    /@uc/modal-loader/0.7.1_2eb23211954108c6f87c7fe8e90d1312
    npm.example.com/axios/0.19.0
    npm.example.com/@sentry/node/5.1.0_@other@1.2.3
    github.com/LewisArdern/eslint-plugin-angularjs-security-rules/41da01727c87119bd523e69e22af2d04ab558ec9
    git.example.com/team/tool/41da01727c87119bd523e69e22af2d04ab558ec9

Commit-pinned keys on hosts without an npm shorthand become ``git+https``
URLs. Each grammar is a function returning a descriptor or ``None``;
:func:`parse_key` tries them in priority order.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from ..errors import MalformedIdentifierError
from ..models import DescriptorKind, PackageDescriptor

# host -> npm shorthand provider
VCS_PROVIDERS = {
    "github.com": "github",
    "gitlab.com": "gitlab",
    "bitbucket.org": "bitbucket",
}

_VCS_RE = re.compile(r"^([^/]+)/([^/]+/([^/]+))/([0-9a-f]{40})$")
_PATH_RE = re.compile(r"^([^/]*)/((?:@[^/]+/)?[^/]+)/(.+)$")


def parse_vcs_key(key: str) -> PackageDescriptor | None:
    """Match ``<host>/<owner>/<repo>/<40-hex commit>``."""
    match = _VCS_RE.match(key)
    if match is None:
        return None
    host, repo_path, repo_name, commit = match.groups()
    provider = VCS_PROVIDERS.get(host)
    if provider is None:
        version = f"git+https://{host}/{repo_path}.git#{commit}"
    else:
        version = f"{provider}:{repo_path}#{commit}"
    return PackageDescriptor(
        kind=DescriptorKind.VERSION_CONTROL,
        full_key=key,
        name=repo_name,
        version=version,
    )


def parse_path_key(key: str) -> PackageDescriptor | None:
    """Match ``<registry-or-empty>/<name>/<version>[_<extra>]``."""
    match = _PATH_RE.match(key)
    if match is None:
        return None
    registry, name, version = match.groups()
    # version-control hosts only ever use the commit grammar
    if registry in VCS_PROVIDERS or _VCS_RE.match(key):
        return None

    version, _, extra = version.partition("_")
    if not version:
        return None
    return PackageDescriptor(
        kind=DescriptorKind.URI if registry else DescriptorKind.VERSION,
        full_key=key,
        name=name,
        version=version,
        extra=extra or None,
    )


_GRAMMARS: tuple[Callable[[str], PackageDescriptor | None], ...] = (
    parse_vcs_key,
    parse_path_key,
)


def parse_key(key: str) -> PackageDescriptor:
    """Return the descriptor for a key from the ``packages`` section.

    Raises:
        MalformedIdentifierError: If no grammar matches.
    """
    for grammar in _GRAMMARS:
        descriptor = grammar(key)
        if descriptor is not None:
            return descriptor
    raise MalformedIdentifierError(key)


def parse_dependency(name: str, specifier: str) -> PackageDescriptor:
    """Return the descriptor for a ``name: specifier`` dependency entry.

    A bare version (``1.2.3`` or ``1.2.3_react@16.8.6``) stands for the
    registry-local key ``/<name>/<version>``; anything else is already a key.
    """
    if specifier[:1].isdigit():
        return parse_key(f"/{name}/{specifier}")
    return parse_key(specifier)
