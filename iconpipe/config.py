# Purpose: Environment-driven settings for the build and release scripts.
# Notes: ICONS_ASSETS_DIR / ICONS_PACKAGES_DIR drive the build; RELEASE_* and
# GITHUB_* drive the release. GITHUB_TOKEN is optional.
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_RELEASE_BRANCH = "main"
DEFAULT_GITHUB_API_BASE = "https://api.github.com"


@dataclass(frozen=True)
class BuildConfig:
    assets_dir: Path
    packages_dir: Path


@dataclass(frozen=True)
class ReleaseConfig:
    root: Path
    release_branch: str
    github_token: str
    github_api_base: str


def _env_path(name: str, default: str) -> Path:
    raw = os.environ.get(name, "").strip()
    return Path(raw or default)


def get_build_config() -> BuildConfig:
    return BuildConfig(
        assets_dir=_env_path("ICONS_ASSETS_DIR", "assets"),
        packages_dir=_env_path("ICONS_PACKAGES_DIR", "packages"),
    )


def get_release_config() -> ReleaseConfig:
    api_base = os.environ.get("GITHUB_API_BASE", "").strip() or DEFAULT_GITHUB_API_BASE
    return ReleaseConfig(
        root=_env_path("RELEASE_ROOT", "."),
        release_branch=os.environ.get("RELEASE_BRANCH", "").strip() or DEFAULT_RELEASE_BRANCH,
        github_token=os.environ.get("GITHUB_TOKEN", "").strip(),
        github_api_base=api_base.rstrip("/"),
    )
