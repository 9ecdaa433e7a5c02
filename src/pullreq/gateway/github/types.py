"""Type definitions for GitHub operations.

Each API call has its own typed payload so field names are checked once, here,
instead of at every call site.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_HOST = "github.com"


@dataclass(frozen=True)
class Project:
    """A repository on a hosting service, identified by (host, owner, name)."""

    host: str
    owner: str
    name: str

    @staticmethod
    def from_spec(host: str, spec: str, *, default_name: str = "") -> Project:
        """Build a project from "owner" or "owner/name".

        Args:
            host: Hosting-service hostname
            spec: Owner, optionally followed by "/name"
            default_name: Name used when spec holds only an owner
        """
        owner, _, name = spec.partition("/")
        return Project(host=host, owner=owner, name=name or default_name)

    def same_as(self, other: Project) -> bool:
        """Compare identity the way GitHub does: case-insensitively."""
        return (
            self.host.lower() == other.host.lower()
            and self.owner.lower() == other.owner.lower()
            and self.name.lower() == other.name.lower()
        )

    @property
    def api_path(self) -> str:
        return f"repos/{self.owner}/{self.name}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositoryInfo:
    """Canonical identity of a repository as reported by the API."""

    owner: str
    name: str


@dataclass(frozen=True)
class Milestone:
    number: int
    title: str


@dataclass(frozen=True)
class PullRequest:
    """A created pull request.

    requested_reviewers and requested_teams hold the user logins and team slugs
    GitHub already lists as requested on the pull request.
    """

    number: int
    url: str
    requested_reviewers: tuple[str, ...] = ()
    requested_teams: tuple[str, ...] = ()


@dataclass(frozen=True)
class CreatePullRequestRequest:
    """Payload for POST /repos/{owner}/{name}/pulls.

    Either title or issue must be set. head is fully qualified ("owner:ref").
    """

    base: str
    head: str
    draft: bool
    title: str | None = None
    body: str | None = None
    issue: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"base": self.base, "head": self.head, "draft": self.draft}
        if self.title:
            payload["title"] = self.title
            if self.body:
                payload["body"] = self.body
        elif self.issue is not None:
            payload["issue"] = self.issue
        return payload


@dataclass(frozen=True)
class IssueMetadataPatch:
    """Payload for PATCH /repos/{owner}/{name}/issues/{number}."""

    labels: tuple[str, ...] = ()
    assignees: tuple[str, ...] = ()
    milestone: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.labels and not self.assignees and self.milestone is None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.labels:
            payload["labels"] = list(self.labels)
        if self.assignees:
            payload["assignees"] = list(self.assignees)
        if self.milestone is not None:
            payload["milestone"] = self.milestone
        return payload


@dataclass(frozen=True)
class ReviewerRequest:
    """Payload for POST /repos/{owner}/{name}/pulls/{number}/requested_reviewers."""

    reviewers: tuple[str, ...] = ()
    team_reviewers: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.reviewers and not self.team_reviewers

    def to_payload(self) -> dict[str, Any]:
        return {"reviewers": list(self.reviewers), "team_reviewers": list(self.team_reviewers)}


# ============================================================================
# Non-ideal results
# ============================================================================


@dataclass(frozen=True)
class GitHubAPIFailed:
    """A GitHub API call failed. Implements NonIdealState."""

    message: str
    status: int | None = None

    @property
    def error_type(self) -> str:
        return "github-api-failed"


@dataclass(frozen=True)
class RepositoryNotFound:
    """Repository lookup failed. Implements NonIdealState."""

    project: Project
    message: str

    @property
    def error_type(self) -> str:
        return "repository-not-found"


@dataclass(frozen=True)
class CreatePullRequestError:
    """Pull request creation was rejected. Implements NonIdealState.

    is_invalid_head marks the transient class where the API does not yet see a
    branch that was just pushed.
    """

    message: str
    status: int | None = None
    is_invalid_head: bool = False
    field_errors: tuple[str, ...] = ()

    @property
    def error_type(self) -> str:
        return "invalid-head" if self.is_invalid_head else "create-pr-failed"
