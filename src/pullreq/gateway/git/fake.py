"""Fake implementation of local repository operations for testing."""

from pathlib import Path
from typing import NamedTuple

from pullreq.gateway.git.abc import Git
from pullreq.gateway.git.types import BranchRef, PushError, PushResult, Remote


class PushedRef(NamedTuple):
    remote: str
    refspec: str
    set_upstream: bool


class FakeGit(Git):
    """In-memory fake of a single local repository.

    This fake accepts pre-configured state in its constructor and tracks
    mutations for test assertions.

    Constructor Injection:
    ---------------------
    - repo_root: Working tree root; the git dir is repo_root / ".git"
    - current_branch: Checked-out branch, or None for a detached HEAD
    - tracking_branches: Mapping of local branch -> branch it tracks
    - remotes: Configured remotes in order
    - default_branches: Mapping of remote name -> default branch
      (remotes missing from the mapping default to "main")
    - commits_between: Mapping of (base, head) -> commit SHAs, newest first
    - commit_messages: Mapping of SHA -> full commit message
    - commit_logs: Mapping of (base, head) -> rendered log
    - comment_char: Value of core.commentChar
    - pull_request_template: Template content, or None
    - push_error: Error returned by push_to_remote()

    Mutation Tracking:
    -----------------
    - pushed_refs: PushedRef tuples from push_to_remote()
    """

    def __init__(
        self,
        *,
        repo_root: Path,
        current_branch: str | None = "main",
        tracking_branches: dict[str, BranchRef] | None = None,
        remotes: list[Remote] | None = None,
        default_branches: dict[str, str] | None = None,
        commits_between: dict[tuple[str, str], list[str]] | None = None,
        commit_messages: dict[str, str] | None = None,
        commit_logs: dict[tuple[str, str], str] | None = None,
        comment_char: str = "#",
        pull_request_template: str | None = None,
        push_error: PushError | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._current_branch = current_branch
        self._tracking_branches = tracking_branches or {}
        self._remotes = remotes or []
        self._default_branches = default_branches or {}
        self._commits_between = commits_between or {}
        self._commit_messages = commit_messages or {}
        self._commit_logs = commit_logs or {}
        self._comment_char = comment_char
        self._pull_request_template = pull_request_template
        self._push_error = push_error

        self._pushed_refs: list[PushedRef] = []

    def get_repository_root(self, cwd: Path) -> Path:
        return self._repo_root

    def get_git_dir(self, cwd: Path) -> Path:
        return self._repo_root / ".git"

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._current_branch

    def get_tracking_branch(self, cwd: Path, branch: str) -> BranchRef | None:
        return self._tracking_branches.get(branch)

    def list_remotes(self, cwd: Path) -> list[Remote]:
        return list(self._remotes)

    def get_default_branch(self, cwd: Path, remote: str) -> str:
        return self._default_branches.get(remote, "main")

    def list_commits_between(self, cwd: Path, base: str, head: str) -> list[str]:
        return list(self._commits_between.get((base, head), []))

    def get_commit_message(self, cwd: Path, sha: str) -> str:
        if sha not in self._commit_messages:
            raise RuntimeError(f"Failed to read message of commit {sha}")
        return self._commit_messages[sha]

    def get_commit_log(self, cwd: Path, base: str, head: str) -> str:
        return self._commit_logs.get((base, head), "")

    def get_comment_char(self, cwd: Path) -> str:
        return self._comment_char

    def read_pull_request_template(self, repo_root: Path) -> str | None:
        return self._pull_request_template

    def push_to_remote(
        self, cwd: Path, remote: str, refspec: str, *, set_upstream: bool
    ) -> PushResult | PushError:
        """Record push to remote, or return the configured error."""
        if self._push_error is not None:
            return self._push_error
        self._pushed_refs.append(
            PushedRef(remote=remote, refspec=refspec, set_upstream=set_upstream)
        )
        return PushResult()

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def pushed_refs(self) -> list[PushedRef]:
        """Read-only access to pushes for test assertions."""
        return list(self._pushed_refs)
