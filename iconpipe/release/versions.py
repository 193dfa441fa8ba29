from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import semver

RELEASE_TYPES = ("major", "minor", "patch")
MANIFEST_FILE = "package.json"
WORKSPACE_DIR = "packages"


class InvalidVersionError(ValueError):
    pass


def suggest_version(current: str, release_type: str) -> str:
    """Next version for ``release_type``; behaves like npm's ``semver.inc``.

    A prerelease such as ``1.2.3-beta.1`` bumps to ``1.2.3`` for patch.
    """
    return str(semver.Version.parse(current).next_version(part=release_type))


def normalize_version(raw: str) -> str:
    """Validate a target version, accepting a leading ``v`` or ``=``."""
    cleaned = (raw or "").strip().lstrip("=v").strip()
    if not cleaned or not semver.Version.is_valid(cleaned):
        raise InvalidVersionError(f"Invalid target version: {raw}")
    return cleaned


def read_manifest(pkg_root: Path) -> dict[str, Any]:
    obj = json.loads((Path(pkg_root) / MANIFEST_FILE).read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ValueError(f"{pkg_root / MANIFEST_FILE} is not a JSON object")
    return obj


def write_manifest_version(pkg_root: Path, version: str) -> None:
    manifest = read_manifest(pkg_root)
    manifest["version"] = version
    path = Path(pkg_root) / MANIFEST_FILE
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def workspace_packages(root: Path) -> tuple[str, ...]:
    """Names of the non-private package directories under ``packages/``."""
    base = Path(root) / WORKSPACE_DIR
    if not base.is_dir():
        return ()
    out: list[str] = []
    for entry in sorted(base.iterdir()):
        if not entry.is_dir() or not (entry / MANIFEST_FILE).is_file():
            continue
        if not read_manifest(entry).get("private"):
            out.append(entry.name)
    return tuple(out)


def update_versions(root: Path, packages: tuple[str, ...], version: str) -> None:
    """Root manifest first, then every workspace package."""
    write_manifest_version(root, version)
    for name in packages:
        write_manifest_version(Path(root) / WORKSPACE_DIR / name, version)
