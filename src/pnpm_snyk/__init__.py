"""pnpm-snyk core package.

Converts a pnpm lockfile into an npm ``package-lock.json`` (lockfileVersion 1)
so that tooling which only understands npm lockfiles can scan pnpm projects.
The conversion core is callable from both the GitHub Action wrapper and the
standalone CLI.
"""

__all__ = [
    "core",
]
