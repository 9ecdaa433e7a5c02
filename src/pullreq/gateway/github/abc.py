"""Abstract base class for GitHub API operations."""

from abc import ABC, abstractmethod

from pullreq.gateway.github.types import (
    CreatePullRequestError,
    CreatePullRequestRequest,
    GitHubAPIFailed,
    IssueMetadataPatch,
    Milestone,
    Project,
    PullRequest,
    RepositoryInfo,
    RepositoryNotFound,
    ReviewerRequest,
)


class GitHub(ABC):
    """Abstract interface for the hosting-service API.

    All implementations (real, fake, dry-run) must implement this interface.
    Expected failures are returned as non-ideal-state values, never raised.
    """

    @abstractmethod
    def get_repository(self, project: Project) -> RepositoryInfo | RepositoryNotFound:
        """Fetch a repository's canonical owner and name.

        Follows renames and transfers, so the result may differ from the input.
        """
        ...

    @abstractmethod
    def create_pull_request(
        self, project: Project, request: CreatePullRequestRequest
    ) -> PullRequest | CreatePullRequestError:
        """Create a pull request in the base project.

        Args:
            project: Base project the pull request targets
            request: Typed creation payload

        Returns:
            The created pull request, or a classified creation error
        """
        ...

    @abstractmethod
    def update_issue(
        self, project: Project, number: int, patch: IssueMetadataPatch
    ) -> None | GitHubAPIFailed:
        """Apply labels, assignees and milestone to an issue or pull request."""
        ...

    @abstractmethod
    def list_milestones(self, project: Project) -> list[Milestone] | GitHubAPIFailed:
        """List the project's open milestones."""
        ...

    @abstractmethod
    def request_reviewers(
        self, project: Project, number: int, request: ReviewerRequest
    ) -> None | GitHubAPIFailed:
        """Request reviews from users and teams on a pull request."""
        ...
