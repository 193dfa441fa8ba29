from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from iconpipe import console

from . import steps
from .context import ReleaseAborted, ReleaseContext, ReleaseIO
from .versions import update_versions

StepFn = Callable[[ReleaseContext, ReleaseIO], ReleaseContext]


@dataclass(frozen=True)
class Step:
    name: str
    run: StepFn
    writes_manifests: bool = False


RELEASE_STEPS: tuple[Step, ...] = (
    Step("verify-branch", steps.verify_branch),
    Step("verify-remote-sync", steps.verify_remote_sync),
    Step("select-version", steps.select_version),
    Step("confirm-version", steps.confirm_version),
    Step("rewrite-package-versions", steps.rewrite_package_versions, writes_manifests=True),
    Step("generate-changelog", steps.generate_changelog),
    Step("confirm-changelog", steps.confirm_changelog),
    Step("update-lockfile", steps.update_lockfile),
    Step("commit-if-dirty", steps.commit_if_dirty),
    Step("tag-and-push", steps.tag_and_push),
    Step("publish-remote-release", steps.publish_remote_release),
    Step("build-all-packages", steps.build_all_packages),
    Step("publish-all-packages", steps.publish_all_packages),
    Step("done", steps.done),
)


def rollback(ctx: ReleaseContext) -> None:
    """Put every manifest back to the version the release started from."""
    console.warn(f"Reverting package versions to {ctx.current_version}")
    update_versions(ctx.root, ctx.packages, ctx.current_version)


def _restore(ctx: ReleaseContext) -> bool:
    """Roll back when the manifests were touched; False if that failed."""
    if not ctx.manifests_dirty:
        return True
    try:
        rollback(ctx)
    except (OSError, ValueError) as e:
        console.error(f"Could not revert package versions to {ctx.current_version}: {e}")
        return False
    return True


def run_release(ctx: ReleaseContext, io: ReleaseIO, release_steps: tuple[Step, ...] = RELEASE_STEPS) -> int:
    """Run ``release_steps`` in order; returns the process exit code.

    A stop, failure or Ctrl-C after the manifests were marked dirty restores
    them. Failures and interrupts return 1, stops and success return 0.
    """
    for step in release_steps:
        if step.writes_manifests:
            # Marked before running so a partial write is also reverted.
            ctx = ctx.model_copy(update={"manifests_dirty": True})
        try:
            ctx = step.run(ctx, io)
        except ReleaseAborted:
            return 0 if _restore(ctx) else 1
        except KeyboardInterrupt:
            console.error(f"Release cancelled at {step.name}")
            _restore(ctx)
            return 1
        except Exception as e:
            console.error(f"Release failed at {step.name}: {e}")
            _restore(ctx)
            return 1
    console.info("")
    return 0
