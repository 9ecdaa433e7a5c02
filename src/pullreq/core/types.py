"""Types shared by the pull request workflow stages.

The non-ideal results below implement NonIdealState. They are grouped by when
they can occur: everything before "Submission" is detected before any remote
mutation happens.
"""

from __future__ import annotations

from dataclasses import dataclass

from pullreq.gateway.github.types import CreatePullRequestRequest, Project


@dataclass(frozen=True)
class PullRequestDraft:
    """A fully specified pull request that has not been submitted yet."""

    base_project: Project
    base: str
    head_project: Project
    head: str
    title: str
    body: str
    draft: bool
    issue_number: int | None = None

    @property
    def qualified_base(self) -> str:
        return f"{self.base_project.owner}:{self.base}"

    @property
    def qualified_head(self) -> str:
        return f"{self.head_project.owner}:{self.head}"

    def to_request(self) -> CreatePullRequestRequest:
        if self.title:
            return CreatePullRequestRequest(
                base=self.base,
                head=self.qualified_head,
                draft=self.draft,
                title=self.title,
                body=self.body or None,
            )
        return CreatePullRequestRequest(
            base=self.base, head=self.qualified_head, draft=self.draft, issue=self.issue_number
        )


# ============================================================================
# Resolution
# ============================================================================


@dataclass(frozen=True)
class NoGitHubRemote:
    """No remote points at a hosting-service repository."""

    @property
    def error_type(self) -> str:
        return "no-github-remote"

    @property
    def message(self) -> str:
        return "Aborted: could not find any git remote pointing to a GitHub repository"


@dataclass(frozen=True)
class DetachedHead:
    """HEAD is detached and no explicit head was given."""

    @property
    def error_type(self) -> str:
        return "detached-head"

    @property
    def message(self) -> str:
        return (
            "Aborted: not currently on any branch\n"
            "(use `-h <branch>` to specify an explicit pull request head)"
        )


@dataclass(frozen=True)
class AmbiguousRef:
    """Head and base are the same ref in the same project."""

    base: str

    @property
    def error_type(self) -> str:
        return "ambiguous-ref"

    @property
    def message(self) -> str:
        return (
            f'Aborted: head branch is the same as base ("{self.base}")\n'
            "(use `-h <branch>` to specify an explicit pull request head)"
        )


@dataclass(frozen=True)
class NoRemoteForHead:
    """Push was requested but no local remote points at the head project."""

    head: str

    @property
    def error_type(self) -> str:
        return "no-remote-for-head"

    @property
    def message(self) -> str:
        return f"Can't find remote for {self.head}"


@dataclass(frozen=True)
class UnpushedCommits:
    """The current branch has commits its tracking branch does not."""

    count: int
    tracking_ref: str

    @property
    def error_type(self) -> str:
        return "unpushed-commits"

    @property
    def message(self) -> str:
        return (
            f"Aborted: {self.count} commits are not yet pushed to {self.tracking_ref}\n"
            "(use `-f` to force submit a pull request anyway)"
        )


# ============================================================================
# Message assembly
# ============================================================================


@dataclass(frozen=True)
class NoCommitsFound:
    base: str
    head: str

    @property
    def error_type(self) -> str:
        return "no-commits-found"

    @property
    def message(self) -> str:
        return f"Aborted: no commits detected between {self.base} and {self.head}"


@dataclass(frozen=True)
class EmptyTitle:
    @property
    def error_type(self) -> str:
        return "empty-title"

    @property
    def message(self) -> str:
        return "Aborting due to empty pull request title"


# ============================================================================
# Submission and metadata
# ============================================================================


@dataclass(frozen=True)
class PullRequestCreateFailed:
    """Creation failed, possibly after retrying.

    transient is True when the last error was the "invalid head" class, i.e. the
    push may still become visible; a pushed branch without a pull request is
    left behind in that case.
    """

    message: str
    transient: bool
    retries: int
    elapsed_seconds: float

    @property
    def error_type(self) -> str:
        return "create-pr-failed"


@dataclass(frozen=True)
class MilestoneNotFound:
    name: str

    @property
    def error_type(self) -> str:
        return "milestone-not-found"

    @property
    def message(self) -> str:
        return f"no milestone found with name '{self.name}'"
