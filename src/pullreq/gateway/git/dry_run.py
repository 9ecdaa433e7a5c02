"""No-op git wrapper for dry-run mode.

Read-only operations are delegated to the wrapped implementation; the push is
reported instead of executed.
"""

from pathlib import Path

from pullreq.gateway.git.abc import Git
from pullreq.gateway.git.types import BranchRef, PushError, PushResult, Remote
from pullreq.output import user_output


class DryRunGit(Git):
    """No-op wrapper that prevents execution of the push.

    Usage:
        noop_git = DryRunGit(RealGit())

        # Query operations work normally
        branch = noop_git.get_current_branch(cwd)

        # The push is only reported
        noop_git.push_to_remote(cwd, "origin", "HEAD:feature", set_upstream=True)
    """

    def __init__(self, wrapped: Git) -> None:
        self._wrapped = wrapped

    # ============================================================================
    # Mutation Operations (no-ops in dry-run mode)
    # ============================================================================

    def push_to_remote(
        self, cwd: Path, remote: str, refspec: str, *, set_upstream: bool
    ) -> PushResult | PushError:
        target = refspec.split(":", 1)[-1]
        user_output(f"Would push to {remote}/{target}")
        return PushResult()

    # ============================================================================
    # Query Operations (delegate to wrapped implementation)
    # ============================================================================

    def get_repository_root(self, cwd: Path) -> Path:
        return self._wrapped.get_repository_root(cwd)

    def get_git_dir(self, cwd: Path) -> Path:
        return self._wrapped.get_git_dir(cwd)

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._wrapped.get_current_branch(cwd)

    def get_tracking_branch(self, cwd: Path, branch: str) -> BranchRef | None:
        return self._wrapped.get_tracking_branch(cwd, branch)

    def list_remotes(self, cwd: Path) -> list[Remote]:
        return self._wrapped.list_remotes(cwd)

    def get_default_branch(self, cwd: Path, remote: str) -> str:
        return self._wrapped.get_default_branch(cwd, remote)

    def list_commits_between(self, cwd: Path, base: str, head: str) -> list[str]:
        return self._wrapped.list_commits_between(cwd, base, head)

    def get_commit_message(self, cwd: Path, sha: str) -> str:
        return self._wrapped.get_commit_message(cwd, sha)

    def get_commit_log(self, cwd: Path, base: str, head: str) -> str:
        return self._wrapped.get_commit_log(cwd, base, head)

    def get_comment_char(self, cwd: Path) -> str:
        return self._wrapped.get_comment_char(cwd)

    def read_pull_request_template(self, repo_root: Path) -> str | None:
        return self._wrapped.read_pull_request_template(repo_root)
