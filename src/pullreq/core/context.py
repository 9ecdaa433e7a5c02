"""Application context with dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pullreq.gateway.browser.abc import BrowserLauncher
from pullreq.gateway.clipboard.abc import Clipboard
from pullreq.gateway.editor.abc import Editor
from pullreq.gateway.git.abc import Git
from pullreq.gateway.github.abc import GitHub
from pullreq.gateway.time.abc import Time


@dataclass(frozen=True)
class PullReqContext:
    """Immutable context holding all dependencies for pullreq operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    github: GitHub
    time: Time
    editor: Editor
    browser: BrowserLauncher
    clipboard: Clipboard
    cwd: Path
    dry_run: bool

    @staticmethod
    def for_test(
        git: Git | None = None,
        github: GitHub | None = None,
        time: Time | None = None,
        editor: Editor | None = None,
        browser: BrowserLauncher | None = None,
        clipboard: Clipboard | None = None,
        cwd: Path | None = None,
        dry_run: bool = False,
    ) -> PullReqContext:
        """Create a context with fake implementations for anything not provided.

        Example:
            >>> git = FakeGit(repo_root=tmp_path, current_branch="feature", remotes=[...])
            >>> ctx = PullReqContext.for_test(git=git, cwd=tmp_path)
        """
        from pullreq.gateway.browser.fake import FakeBrowserLauncher
        from pullreq.gateway.clipboard.fake import FakeClipboard
        from pullreq.gateway.editor.fake import FakeEditor
        from pullreq.gateway.git.fake import FakeGit
        from pullreq.gateway.github.fake import FakeGitHub
        from pullreq.gateway.time.fake import FakeTime

        resolved_cwd = cwd if cwd is not None else Path("/test/repo")
        return PullReqContext(
            git=git if git is not None else FakeGit(repo_root=resolved_cwd),
            github=github if github is not None else FakeGitHub(),
            time=time if time is not None else FakeTime(),
            editor=editor if editor is not None else FakeEditor(),
            browser=browser if browser is not None else FakeBrowserLauncher(),
            clipboard=clipboard if clipboard is not None else FakeClipboard(),
            cwd=resolved_cwd,
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool) -> PullReqContext:
    """Create the production context.

    In dry-run mode the git and GitHub gateways are wrapped so that reads still
    happen but the push and every API mutation are only reported.
    """
    from pullreq.gateway.browser.real import RealBrowserLauncher
    from pullreq.gateway.clipboard.real import RealClipboard
    from pullreq.gateway.editor.real import RealEditor
    from pullreq.gateway.git.dry_run import DryRunGit
    from pullreq.gateway.git.real import RealGit
    from pullreq.gateway.github.dry_run import DryRunGitHub
    from pullreq.gateway.github.real import RealGitHub
    from pullreq.gateway.time.real import RealTime

    git: Git = RealGit()
    github: GitHub = RealGitHub()
    if dry_run:
        git = DryRunGit(git)
        github = DryRunGitHub(github)

    return PullReqContext(
        git=git,
        github=github,
        time=RealTime(),
        editor=RealEditor(),
        browser=RealBrowserLauncher(),
        clipboard=RealClipboard(),
        cwd=Path.cwd(),
        dry_run=dry_run,
    )
