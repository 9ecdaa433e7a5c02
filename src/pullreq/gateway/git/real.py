"""Production implementation of local repository operations using subprocess."""

import subprocess
from pathlib import Path

from pullreq.gateway.git.abc import Git
from pullreq.gateway.git.types import BranchRef, PushError, PushResult, Remote
from pullreq.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context

# Timeout in seconds for network-touching git operations (push).
# Prevents indefinite hangs on network issues or credential prompts.
_GIT_NETWORK_TIMEOUT = 120

_FALLBACK_DEFAULT_BRANCH = "master"
_TEMPLATE_NAMES = ("pull_request_template", "pull_request_template.md")
_TEMPLATE_DIRS = (".", ".github", "docs")


def _git_config_value(cwd: Path, key: str) -> str | None:
    result = subprocess.run(
        ["git", "config", "--get", key],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        return None
    value = result.stdout.strip()
    return value or None


class RealGit(Git):
    """Production implementation using git via subprocess.

    Query operations that git answers with a non-zero exit for "nothing there"
    (no upstream, unknown ref) return empty values; everything else raises
    RuntimeError with the failing command attached.
    """

    def get_repository_root(self, cwd: Path) -> Path:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--show-toplevel"],
            operation_context="find repository root",
            cwd=cwd,
        )
        return Path(result.stdout.strip())

    def get_git_dir(self, cwd: Path) -> Path:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--absolute-git-dir"],
            operation_context="find git directory",
            cwd=cwd,
        )
        return Path(result.stdout.strip())

    def get_current_branch(self, cwd: Path) -> str | None:
        result = subprocess.run(
            ["git", "symbolic-ref", "--quiet", "--short", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_tracking_branch(self, cwd: Path, branch: str) -> BranchRef | None:
        remote = _git_config_value(cwd, f"branch.{branch}.remote")
        merge = _git_config_value(cwd, f"branch.{branch}.merge")
        if remote is None or merge is None:
            return None
        short_name = merge.removeprefix("refs/heads/")
        # "." means the branch tracks another local branch
        if remote == ".":
            return BranchRef(short_name=short_name)
        return BranchRef(short_name=short_name, remote=remote)

    def list_remotes(self, cwd: Path) -> list[Remote]:
        result = run_subprocess_with_context(
            ["git", "remote", "-v"],
            operation_context="list remotes",
            cwd=cwd,
        )
        remotes: list[Remote] = []
        seen: set[str] = set()
        for line in result.stdout.splitlines():
            # Format: "origin\tgit@github.com:owner/repo.git (fetch)"
            parts = line.split()
            if len(parts) < 3 or parts[2] != "(fetch)" or parts[0] in seen:
                continue
            seen.add(parts[0])
            remotes.append(Remote(name=parts[0], url=parts[1]))
        return remotes

    def get_default_branch(self, cwd: Path, remote: str) -> str:
        result = subprocess.run(
            ["git", "symbolic-ref", f"refs/remotes/{remote}/HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return _FALLBACK_DEFAULT_BRANCH
        return result.stdout.strip().removeprefix(f"refs/remotes/{remote}/")

    def list_commits_between(self, cwd: Path, base: str, head: str) -> list[str]:
        result = subprocess.run(
            ["git", "rev-list", "--cherry-pick", "--right-only", "--no-merges", f"{base}...{head}"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return []
        return [line for line in result.stdout.splitlines() if line]

    def get_commit_message(self, cwd: Path, sha: str) -> str:
        result = run_subprocess_with_context(
            ["git", "-c", "log.showSignature=false", "show", "-s", "--format=%s%n%+b", sha],
            operation_context=f"read message of commit {sha}",
            cwd=cwd,
        )
        return result.stdout.rstrip()

    def get_commit_log(self, cwd: Path, base: str, head: str) -> str:
        result = run_subprocess_with_context(
            [
                "git",
                "-c",
                "log.showSignature=false",
                "log",
                "--no-color",
                "--format=%h (%aN, %ar)%n%w(78,3,3)%s%n%+b",
                "--cherry",
                f"{base}...{head}",
            ],
            operation_context=f"read commit log between {base} and {head}",
            cwd=cwd,
        )
        return result.stdout

    def get_comment_char(self, cwd: Path) -> str:
        value = _git_config_value(cwd, "core.commentChar")
        if value is None or value == "auto":
            return "#"
        return value

    def read_pull_request_template(self, repo_root: Path) -> str | None:
        for directory in _TEMPLATE_DIRS:
            template_dir = repo_root / directory
            if not template_dir.is_dir():
                continue
            for candidate in sorted(template_dir.iterdir()):
                if candidate.is_file() and candidate.name.lower() in _TEMPLATE_NAMES:
                    return candidate.read_text(encoding="utf-8").rstrip("\n")
        return None

    def push_to_remote(
        self, cwd: Path, remote: str, refspec: str, *, set_upstream: bool
    ) -> PushResult | PushError:
        cmd = ["git", "push"]
        if set_upstream:
            cmd.append("--set-upstream")
        cmd.extend([remote, refspec])

        try:
            run_subprocess_with_context(
                cmd,
                operation_context=f"push '{refspec}' to remote '{remote}'",
                cwd=cwd,
                timeout=_GIT_NETWORK_TIMEOUT,
                env=copied_env_for_git_subprocess(),
            )
        except RuntimeError as e:
            return PushError(message=str(e))
        return PushResult()
