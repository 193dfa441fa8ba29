from __future__ import annotations

import webbrowser
from pathlib import Path

from iconpipe import console

from .changelog import CHANGELOG_FILE, read_release_notes
from .context import ReleaseAborted, ReleaseContext, ReleaseIO
from .github import GitHubError, RepoInfo, new_release_url, parse_repo_info
from .shell import CommandError
from .versions import RELEASE_TYPES, WORKSPACE_DIR, normalize_version, suggest_version, update_versions

ALREADY_PUBLISHED_MARKER = "previously published"


def _repo(io: ReleaseIO) -> RepoInfo:
    return parse_repo_info(io.shell.run(["git", "remote", "get-url", "origin"]).strip())


def verify_branch(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    branch = io.shell.run(["git", "branch", "--show-current"]).strip()
    if branch != ctx.release_branch:
        console.error(f"Can only be published on the {ctx.release_branch} branch.")
        raise ReleaseAborted()
    return ctx


def verify_remote_sync(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    try:
        remote_sha = io.github.latest_commit_sha(_repo(io), ctx.release_branch)
        local_sha = io.shell.run(["git", "rev-parse", "HEAD"]).strip()
    except (GitHubError, CommandError, ValueError) as e:
        console.error(f"Failed to check whether local HEAD is up-to-date with remote: {e}")
        raise ReleaseAborted() from e

    if remote_sha != local_sha:
        ok = io.prompter.confirm(
            "Local HEAD is not up-to-date with remote. Are you sure you want to continue?",
            warning=True,
        )
        if not ok:
            raise ReleaseAborted()
    else:
        console.success("Commit is up-to-date with remote.\n")
    return ctx


def select_version(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    target = ctx.target_version
    if not target:
        options = [(t, f"{t} ({suggest_version(ctx.current_version, t)})") for t in RELEASE_TYPES]
        options.append(("custom", "custom"))
        choice = io.prompter.select("Select release type", options)
        if choice == "custom":
            target = io.prompter.text("Input custom version", default=ctx.current_version)
        else:
            target = suggest_version(ctx.current_version, choice)
    return ctx.model_copy(update={"target_version": normalize_version(target)})


def confirm_version(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    if not io.prompter.confirm(f"Releasing {ctx.tag}. Confirm?"):
        raise ReleaseAborted()
    return ctx


def rewrite_package_versions(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nUpdating packages versions...")
    update_versions(ctx.root, ctx.packages, ctx.target_version)
    return ctx


def generate_changelog(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nGenerating changelog...")
    io.shell.run(["conventional-changelog", "-p", "angular", "-i", CHANGELOG_FILE, "-s"])
    return ctx


def confirm_changelog(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    if not io.prompter.confirm("Changelog generated. Does it look good?"):
        raise ReleaseAborted()
    return ctx


def update_lockfile(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nUpdating lockfile...")
    io.shell.run(["pnpm", "install", "--prefer-offline"])
    return ctx


def commit_if_dirty(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    if io.shell.run(["git", "diff"]).strip():
        console.step("\nCommitting changes...")
        io.shell.run_if_not_dry(["git", "add", "-A"])
        io.shell.run_if_not_dry(["git", "commit", "-m", f"chore(release): release {ctx.tag}"])
    else:
        console.success("No changes to commit.\n")
    return ctx


def tag_and_push(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nPushing to github...")
    io.shell.run_if_not_dry(["git", "tag", ctx.tag])
    io.shell.run_if_not_dry(["git", "push", "origin", f"refs/tags/{ctx.tag}"])
    io.shell.run_if_not_dry(["git", "push"])
    return ctx


def publish_remote_release(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nPublishing github release...")
    repo = _repo(io)
    notes = read_release_notes(ctx.root, ctx.target_version)

    if ctx.dry_run:
        console.step("\nDry run - skipping github release...")
        return ctx

    if not ctx.github_token:
        url = new_release_url(repo, tag=ctx.tag, title=ctx.tag, body=notes)
        console.info(f"GITHUB_TOKEN is not set, opening {url}")
        webbrowser.open(url)
        return ctx

    io.github.create_release(repo, tag=ctx.tag, name=ctx.tag, body=notes)
    console.success(f"Created github release {ctx.tag}")
    return ctx


def build_all_packages(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nBuilding all packages...")
    io.shell.run(["pnpm", "build"])
    return ctx


def publish_package(ctx: ReleaseContext, io: ReleaseIO, name: str) -> None:
    console.step(f"Publishing {name}...")
    args = ["pnpm", "publish", "--access", "public"]
    if ctx.dry_run:
        args += ["--dry-run", "--no-git-checks"]
    try:
        io.shell.run(args, cwd=Path(ctx.root) / WORKSPACE_DIR / name)
    except CommandError as e:
        if ALREADY_PUBLISHED_MARKER in str(e):
            console.warn(f"Skipping already published: {name}")
            return
        raise
    console.success(f"Successfully published {name}@{ctx.target_version}")


def publish_all_packages(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    console.step("\nPublishing packages...")
    for name in ctx.packages:
        publish_package(ctx, io, name)
    return ctx


def done(ctx: ReleaseContext, io: ReleaseIO) -> ReleaseContext:
    if ctx.dry_run:
        console.info("\nDry run finished - run git diff to see package changes.")
    return ctx
