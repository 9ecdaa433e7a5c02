"""Abstract base class for local repository operations.

This interface covers everything the pull-request workflow reads from the local
repository, plus the single mutation it performs (pushing the head branch).
"""

from abc import ABC, abstractmethod
from pathlib import Path

from pullreq.gateway.git.types import BranchRef, PushError, PushResult, Remote


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real, fake, dry-run) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path:
        """Get the top-level directory of the working tree.

        Raises:
            RuntimeError: If cwd is not inside a git repository
        """
        ...

    @abstractmethod
    def get_git_dir(self, cwd: Path) -> Path:
        """Get the .git directory used for scratch files like PULLREQ_EDITMSG."""
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the short name of the checked-out branch, or None if HEAD is detached."""
        ...

    @abstractmethod
    def get_tracking_branch(self, cwd: Path, branch: str) -> BranchRef | None:
        """Get the branch that a local branch is configured to track.

        Returns:
            A remote BranchRef when tracking a remote branch, a local BranchRef
            when tracking another local branch, or None without upstream config
        """
        ...

    @abstractmethod
    def list_remotes(self, cwd: Path) -> list[Remote]:
        """List configured remotes with their fetch URLs, in configuration order."""
        ...

    @abstractmethod
    def get_default_branch(self, cwd: Path, remote: str) -> str:
        """Get the short name of a remote's default branch (refs/remotes/<remote>/HEAD)."""
        ...

    @abstractmethod
    def list_commits_between(self, cwd: Path, base: str, head: str) -> list[str]:
        """List commits reachable from head but not base, newest first.

        Equivalent commits already on base (cherry-picks) and merges are excluded.
        """
        ...

    @abstractmethod
    def get_commit_message(self, cwd: Path, sha: str) -> str:
        """Get the full message (subject, blank line, body) of one commit."""
        ...

    @abstractmethod
    def get_commit_log(self, cwd: Path, base: str, head: str) -> str:
        """Render a human-readable log of the commits between base and head."""
        ...

    @abstractmethod
    def get_comment_char(self, cwd: Path) -> str:
        """Get core.commentChar, defaulting to "#"."""
        ...

    @abstractmethod
    def read_pull_request_template(self, repo_root: Path) -> str | None:
        """Read the repository's pull request template, if one exists."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def push_to_remote(
        self, cwd: Path, remote: str, refspec: str, *, set_upstream: bool
    ) -> PushResult | PushError:
        """Push a refspec (e.g. "HEAD:feature") to a remote."""
        ...
