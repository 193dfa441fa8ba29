import pytest
from pydantic import ValidationError

from fakes import FakeGitHub, FakePrompter, FakeShell, make_ctx, make_io, manifest_version
from iconpipe.release import steps
from iconpipe.release.context import ReleaseAborted
from iconpipe.release.github import GitHubError
from iconpipe.release.workflow import RELEASE_STEPS, Step, run_release


class _InterruptingPrompter(FakePrompter):
    def __init__(self, at: str) -> None:
        super().__init__()
        self.at = at

    def confirm(self, message: str, *, warning: bool = False) -> bool:
        if self.at in message:
            raise KeyboardInterrupt
        return super().confirm(message, warning=warning)


def _versions(root):
    return (
        manifest_version(root),
        manifest_version(root / "packages" / "react"),
        manifest_version(root / "packages" / "vue"),
    )


class TestContext:
    def test_frozen(self, repo):
        ctx = make_ctx(repo)
        with pytest.raises(ValidationError):
            ctx.current_version = "2.0.0"

    def test_tag_needs_target(self, repo):
        with pytest.raises(RuntimeError):
            make_ctx(repo).tag
        assert make_ctx(repo, target_version="2.0.0").tag == "v2.0.0"

    def test_only_the_rewrite_step_writes_manifests(self):
        assert [s.name for s in RELEASE_STEPS if s.writes_manifests] == ["rewrite-package-versions"]


class TestHappyPath:
    def test_full_release(self, repo):
        shell, github = FakeShell(), FakeGitHub()
        code = run_release(make_ctx(repo, target_version="2.0.0"), make_io(shell=shell, github=github))

        assert code == 0
        assert _versions(repo) == ("2.0.0", "2.0.0", "2.0.0")
        assert manifest_version(repo / "packages" / "playground") == "0.0.0"
        assert shell.calls == [
            "git branch --show-current",
            "git remote get-url origin",
            "git rev-parse HEAD",
            "conventional-changelog -p angular -i CHANGELOG.md -s",
            "pnpm install --prefer-offline",
            "git diff",
            "git add -A",
            "git commit -m chore(release): release v2.0.0",
            "git tag v2.0.0",
            "git push origin refs/tags/v2.0.0",
            "git push",
            "git remote get-url origin",
            "pnpm build",
            "pnpm publish --access public@react",
            "pnpm publish --access public@vue",
        ]
        assert len(github.releases) == 1
        release = github.releases[0]
        assert (release["owner"], release["repo"], release["tag"], release["name"]) == ("acme", "icons", "v2.0.0", "v2.0.0")
        assert release["body"].startswith("### Features")

    def test_clean_tree_skips_commit(self, repo, capsys):
        shell = FakeShell(responses={
            "git branch --show-current": "main\n",
            "git remote get-url origin": "git@github.com:acme/icons.git\n",
            "git rev-parse HEAD": "abc123\n",
        })
        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(shell=shell)) == 0
        assert not any(c.startswith("git commit") for c in shell.calls)
        assert "No changes to commit." in capsys.readouterr().out

    def test_select_version_suggestions(self, repo):
        prompter = FakePrompter(select="minor")
        ctx = steps.select_version(make_ctx(repo, current_version="1.2.3"), make_io(prompter=prompter))

        assert ctx.target_version == "1.3.0"
        assert prompter.options == [
            ("major", "major (2.0.0)"),
            ("minor", "minor (1.3.0)"),
            ("patch", "patch (1.2.4)"),
            ("custom", "custom"),
        ]

    def test_custom_version(self, repo):
        prompter = FakePrompter(select="custom", text="v3.0.0-rc.0")
        ctx = steps.select_version(make_ctx(repo), make_io(prompter=prompter))
        assert ctx.target_version == "3.0.0-rc.0"
        assert "Input custom version" in prompter.asked


class TestStops:
    def test_wrong_branch(self, repo, capsys):
        shell = FakeShell(responses={"git branch --show-current": "feature/x\n"})
        assert run_release(make_ctx(repo), make_io(shell=shell)) == 0
        assert shell.calls == ["git branch --show-current"]
        assert "Can only be published on the main branch." in capsys.readouterr().err

    def test_remote_out_of_sync_declined(self, repo):
        shell, prompter = FakeShell(), FakePrompter(answers={"not up-to-date": False})
        code = run_release(make_ctx(repo), make_io(shell=shell, prompter=prompter, github=FakeGitHub(sha="def456")))

        assert code == 0
        assert prompter.asked == ["Local HEAD is not up-to-date with remote. Are you sure you want to continue?"]
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")

    def test_remote_out_of_sync_accepted(self, repo):
        io = make_io(github=FakeGitHub(sha="def456"))
        assert run_release(make_ctx(repo, target_version="2.0.0"), io) == 0
        assert _versions(repo) == ("2.0.0", "2.0.0", "2.0.0")

    def test_remote_check_error(self, repo, capsys):
        prompter = FakePrompter()
        io = make_io(prompter=prompter, github=FakeGitHub(error=GitHubError("rate limited")))

        assert run_release(make_ctx(repo), io) == 0
        assert prompter.asked == []
        assert "rate limited" in capsys.readouterr().err

    def test_version_not_confirmed(self, repo):
        shell = FakeShell()
        io = make_io(shell=shell, prompter=FakePrompter(answers={"Confirm?": False}))

        assert run_release(make_ctx(repo, target_version="2.0.0"), io) == 0
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")
        assert "pnpm install --prefer-offline" not in shell.calls

    def test_changelog_rejected_rolls_back(self, repo):
        shell = FakeShell()
        io = make_io(shell=shell, prompter=FakePrompter(answers={"Changelog generated": False}))

        assert run_release(make_ctx(repo, target_version="2.0.0"), io) == 0
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")
        assert "git tag v2.0.0" not in shell.calls


class TestFailures:
    def test_invalid_custom_version(self, repo, capsys):
        shell = FakeShell()
        io = make_io(shell=shell, prompter=FakePrompter(select="custom", text="banana"))

        assert run_release(make_ctx(repo), io) == 1
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")
        assert not any(c.startswith("conventional-changelog") for c in shell.calls)
        assert "select-version" in capsys.readouterr().err

    def test_lockfile_failure_rolls_back(self, repo, capsys):
        shell = FakeShell(fail={"pnpm install --prefer-offline": "ERR_PNPM_OUTDATED_LOCKFILE"})

        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(shell=shell)) == 1
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")
        assert "git tag v2.0.0" not in shell.calls
        assert "update-lockfile" in capsys.readouterr().err

    def test_partial_manifest_write_rolls_back(self, repo):
        def half_write(ctx, io):
            (repo / "package.json").write_text('{"name": "x", "version": "9.9.9"}\n', encoding="utf-8")
            raise OSError("disk full")

        release_steps = (Step("write", half_write, writes_manifests=True),)
        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(), release_steps) == 1
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")

    def test_interrupt_at_prompt_rolls_back(self, repo, capsys):
        shell = FakeShell()
        io = make_io(shell=shell, prompter=_InterruptingPrompter("Changelog generated"))

        assert run_release(make_ctx(repo, target_version="2.0.0"), io) == 1
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")
        assert "git tag v2.0.0" not in shell.calls
        assert "Release cancelled at confirm-changelog" in capsys.readouterr().err

    def test_interrupt_before_rewrite_leaves_manifests(self, repo):
        io = make_io(prompter=_InterruptingPrompter("Confirm?"))

        assert run_release(make_ctx(repo, target_version="2.0.0"), io) == 1
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")

    @pytest.mark.parametrize("stop", [OSError("disk full"), ReleaseAborted()])
    def test_failed_rollback_is_reported(self, repo, capsys, stop):
        def corrupt(ctx, io):
            (repo / "package.json").write_text("{", encoding="utf-8")
            raise stop

        release_steps = (Step("write", corrupt, writes_manifests=True),)
        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(), release_steps) == 1
        assert "Could not revert package versions to 1.9.0" in capsys.readouterr().err

    def test_missing_changelog_section(self, repo):
        github = FakeGitHub()
        assert run_release(make_ctx(repo, target_version="2.1.0"), make_io(github=github)) == 1
        assert github.releases == []
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")

    def test_already_published_is_skipped(self, repo, capsys):
        shell = FakeShell(fail={
            "pnpm publish --access public@react": "npm ERR! You cannot publish over the previously published versions: 2.0.0.",
        })

        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(shell=shell)) == 0
        assert shell.calls[-1] == "pnpm publish --access public@vue"
        out = capsys.readouterr().out
        assert "Skipping already published: react" in out
        assert "Successfully published vue@2.0.0" in out

    def test_publish_failure_aborts(self, repo):
        shell = FakeShell(fail={"pnpm publish --access public@react": "npm ERR! 403 Forbidden"})

        assert run_release(make_ctx(repo, target_version="2.0.0"), make_io(shell=shell)) == 1
        assert "pnpm publish --access public@vue" not in shell.calls
        assert _versions(repo) == ("1.9.0", "1.9.0", "1.9.0")


class TestDryRun:
    def test_side_effects_are_logged(self, repo):
        shell, github = FakeShell(dry_run=True), FakeGitHub()
        ctx = make_ctx(repo, target_version="2.0.0", dry_run=True)

        assert run_release(ctx, make_io(shell=shell, github=github)) == 0
        assert shell.dry_calls == [
            "git add -A",
            "git commit -m chore(release): release v2.0.0",
            "git tag v2.0.0",
            "git push origin refs/tags/v2.0.0",
            "git push",
        ]
        assert github.releases == []
        assert "pnpm publish --access public --dry-run --no-git-checks@react" in shell.calls
        assert _versions(repo) == ("2.0.0", "2.0.0", "2.0.0")


def test_without_token_opens_browser(repo, monkeypatch):
    opened = []
    monkeypatch.setattr(steps.webbrowser, "open", opened.append)
    github = FakeGitHub()

    assert run_release(make_ctx(repo, target_version="2.0.0", github_token=""), make_io(github=github)) == 0
    assert github.releases == []
    assert len(opened) == 1
    assert opened[0].startswith("https://github.com/acme/icons/releases/new?tag=v2.0.0&title=v2.0.0&body=")
