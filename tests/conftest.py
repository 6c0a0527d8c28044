"""Shared fixtures: a representative pnpm lockfile and a fake Snyk CLI."""

from __future__ import annotations

import copy
import subprocess
from pathlib import Path

import pytest
import yaml

from pnpm_snyk.models import PnpmLockfile

COMMIT = "41da01727c87119bd523e69e22af2d04ab558ec9"
VCS_KEY = f"github.com/owner/eslint-plugin-x/{COMMIT}"
TARBALL = f"https://codeload.github.com/owner/eslint-plugin-x/tar.gz/{COMMIT}"

SAMPLE_LOCKFILE = {
    "lockfileVersion": "5.3",
    "specifiers": {
        "@scope/pkg": "1.2.0",
        "foo": "^1.0.0",
        "baz": "^3.0.0",
        "eslint-plugin-x": "github:owner/eslint-plugin-x",
        "jest": "^27.0.0",
    },
    "dependencies": {
        "@scope/pkg": "1.2.0",
        "foo": "1.0.0",
        "baz": "3.0.0",
        "eslint-plugin-x": VCS_KEY,
    },
    "devDependencies": {
        "jest": "27.0.0",
    },
    "packages": {
        "/@scope/pkg/1.2.0": {"resolution": {"integrity": "sha-ABC"}},
        "/foo/1.0.0": {
            "resolution": {"integrity": "sha-foo-1.0.0"},
            "dependencies": {"bar": "2.0.0"},
        },
        "/foo/1.1.0": {"resolution": {"integrity": "sha-foo-1.1.0"}},
        "/bar/2.0.0": {"resolution": {"integrity": "sha-bar"}},
        "/baz/3.0.0": {
            "resolution": {"integrity": "sha-baz"},
            "dependencies": {"foo": "1.1.0", "react-dom": "17.0.2_react@17.0.2"},
        },
        "/react-dom/17.0.2_react@17.0.2": {
            "resolution": {"integrity": "sha-react-dom"},
            "dependencies": {"react": "17.0.2"},
        },
        "/react/17.0.2": {"resolution": {"integrity": "sha-react"}},
        VCS_KEY: {
            "name": "eslint-plugin-x",
            "version": "1.0.0",
            "resolution": {"tarball": TARBALL},
            "dev": False,
        },
        "/jest/27.0.0": {"resolution": {"integrity": "sha-jest"}, "dev": True},
    },
}


@pytest.fixture
def sample_data() -> dict:
    return copy.deepcopy(SAMPLE_LOCKFILE)


@pytest.fixture
def sample_lockfile(sample_data) -> PnpmLockfile:
    return PnpmLockfile.from_dict(sample_data)


def write_lockfile(directory: Path, data: dict) -> Path:
    path = directory / "pnpm-lock.yaml"
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def lockfile_path(tmp_path, sample_data) -> Path:
    return write_lockfile(tmp_path, sample_data)


class FakeSnyk:
    """Stand-in for ``pnpm_snyk.action.snyk._run`` that records commands."""

    def __init__(self, test_codes: tuple[int, ...] = (0,), delta_code: int = 0) -> None:
        self.calls: list[list[str]] = []
        self.stdins: list[str | None] = []
        self.test_codes = list(test_codes)
        self.delta_code = delta_code

    def __call__(self, command, cwd=None, stdin=None) -> subprocess.CompletedProcess:
        command = list(command)
        self.calls.append(command)
        self.stdins.append(stdin)
        if command[1] == "snyk-delta":
            code = self.delta_code
        elif command[2] == "test":
            code = self.test_codes.pop(0) if len(self.test_codes) > 1 else self.test_codes[0]
        else:
            code = 0
        return subprocess.CompletedProcess(
            command, code, stdout=f"{' '.join(command[1:3])} output", stderr=""
        )

    def commands(self, subcommand: str) -> list[list[str]]:
        return [call for call in self.calls if call[1:3] == ["snyk", subcommand]]


@pytest.fixture
def fake_snyk(monkeypatch) -> FakeSnyk:
    from pnpm_snyk.action import snyk

    fake = FakeSnyk()
    monkeypatch.setattr(snyk, "_run", fake)
    return fake
