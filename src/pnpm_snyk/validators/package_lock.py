"""Check a package-lock.json against the lockfileVersion 1 layout we emit.

Run ``python -m pnpm_snyk.validators.package_lock [path]`` to check a file
written by an earlier conversion before handing it to Snyk.
"""

from __future__ import annotations

import argparse
import json
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..writer import PACKAGE_LOCK_NAME

DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "package-lock-v1.schema.json"


@lru_cache(maxsize=None)
def _validator(schema_path: Path) -> Draft202012Validator:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def _locate(error: ValidationError) -> str:
    """Name the dependency chain and field an error points at.

    ``dependencies/foo/dependencies/bar/requires`` reads as ``foo > bar [requires]``.
    """
    path = list(error.path)
    chain = []
    while len(path) >= 2 and path[0] == "dependencies":
        chain.append(str(path[1]))
        path = path[2:]
    field = ".".join(str(part) for part in path)
    if not chain:
        return field or "document"
    return " > ".join(chain) + (f" [{field}]" if field else "")


def validate_package_lock(document: Any, schema_path: Path = DEFAULT_SCHEMA) -> None:
    """Raise ValueError listing each record of ``document`` that breaks the layout."""
    errors = sorted(
        _validator(Path(schema_path)).iter_errors(document),
        key=lambda e: [str(part) for part in e.path],
    )
    if errors:
        raise ValueError("\n".join(f"  {_locate(error)}: {error.message}" for error in errors))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check that a converted package-lock.json is a valid lockfileVersion 1 document."
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path(PACKAGE_LOCK_NAME),
        help=f"package-lock to check (default: ./{PACKAGE_LOCK_NAME})",
    )
    args = parser.parse_args(argv)

    try:
        document = json.loads(args.path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        print(f"ERROR: {args.path} does not exist; run the conversion first", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(
            f"ERROR: {args.path} is not JSON (line {exc.lineno}, column {exc.colno})",
            file=sys.stderr,
        )
        return 1

    try:
        validate_package_lock(document)
    except ValueError as exc:
        print(f"ERROR: {args.path} is not a lockfileVersion 1 package-lock:\n{exc}", file=sys.stderr)
        return 1

    print(f"{args.path}: {len(document['dependencies'])} top-level dependencies, layout OK")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
