from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from iconpipe.config import ReleaseConfig

from .github import GitHubClient
from .prompts import Prompter
from .shell import Shell
from .versions import read_manifest, workspace_packages


class ReleaseAborted(Exception):
    """Stops the release without counting as a failure."""


class ReleaseContext(BaseModel):
    """State threaded through the release steps.

    Steps never mutate a context; they return ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path
    current_version: str
    target_version: str | None = None
    packages: tuple[str, ...] = ()
    release_branch: str = "main"
    dry_run: bool = False
    github_token: str = ""
    manifests_dirty: bool = False

    @property
    def tag(self) -> str:
        if not self.target_version:
            raise RuntimeError("target version has not been selected")
        return f"v{self.target_version}"


@dataclass(frozen=True)
class ReleaseIO:
    shell: Shell
    prompter: Prompter
    github: GitHubClient


def load_context(config: ReleaseConfig, *, target_version: str | None, dry_run: bool) -> ReleaseContext:
    root = config.root.resolve()
    current = str(read_manifest(root).get("version") or "").strip()
    if not current:
        raise ValueError(f"{root / 'package.json'} has no version")
    return ReleaseContext(
        root=root,
        current_version=current,
        target_version=target_version or None,
        packages=workspace_packages(root),
        release_branch=config.release_branch,
        dry_run=dry_run,
        github_token=config.github_token,
    )


def default_io(config: ReleaseConfig, ctx: ReleaseContext) -> ReleaseIO:
    return ReleaseIO(
        shell=Shell(cwd=ctx.root, dry_run=ctx.dry_run),
        prompter=Prompter(),
        github=GitHubClient(api_base=config.github_api_base, token=config.github_token),
    )
