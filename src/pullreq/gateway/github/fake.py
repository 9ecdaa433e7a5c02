"""Fake GitHub implementation for testing."""

from pullreq.gateway.github.abc import GitHub
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


class FakeGitHub(GitHub):
    """In-memory fake implementation of the GitHub API.

    Constructor Injection:
    ---------------------
    - repositories: Mapping of "owner/name" -> canonical RepositoryInfo.
      Projects missing from the mapping return RepositoryNotFound.
    - create_results: Results returned by successive create_pull_request() calls.
      The last entry repeats once the list is exhausted. Defaults to a single
      successful pull request #1.
    - milestones: Mapping of "owner/name" -> milestones
    - list_milestones_error: Error returned by list_milestones()
    - update_issue_error: Error returned by update_issue()
    - request_reviewers_error: Error returned by request_reviewers()

    Mutation Tracking:
    -----------------
    - created_pull_requests: (project, request) pairs passed to create_pull_request()
    - issue_updates: (project, number, patch) triples passed to update_issue()
    - reviewer_requests: (project, number, request) triples passed to request_reviewers()
    """

    def __init__(
        self,
        *,
        repositories: dict[str, RepositoryInfo] | None = None,
        create_results: list[PullRequest | CreatePullRequestError] | None = None,
        milestones: dict[str, list[Milestone]] | None = None,
        list_milestones_error: GitHubAPIFailed | None = None,
        update_issue_error: GitHubAPIFailed | None = None,
        request_reviewers_error: GitHubAPIFailed | None = None,
    ) -> None:
        self._repositories = repositories or {}
        self._create_results = create_results or [
            PullRequest(number=1, url="https://github.com/owner/repo/pull/1")
        ]
        self._milestones = milestones or {}
        self._list_milestones_error = list_milestones_error
        self._update_issue_error = update_issue_error
        self._request_reviewers_error = request_reviewers_error

        self._created_pull_requests: list[tuple[Project, CreatePullRequestRequest]] = []
        self._issue_updates: list[tuple[Project, int, IssueMetadataPatch]] = []
        self._reviewer_requests: list[tuple[Project, int, ReviewerRequest]] = []

    def get_repository(self, project: Project) -> RepositoryInfo | RepositoryNotFound:
        info = self._repositories.get(str(project))
        if info is None:
            return RepositoryNotFound(project=project, message=f"Not Found: {project}")
        return info

    def create_pull_request(
        self, project: Project, request: CreatePullRequestRequest
    ) -> PullRequest | CreatePullRequestError:
        index = min(len(self._created_pull_requests), len(self._create_results) - 1)
        self._created_pull_requests.append((project, request))
        return self._create_results[index]

    def update_issue(
        self, project: Project, number: int, patch: IssueMetadataPatch
    ) -> None | GitHubAPIFailed:
        self._issue_updates.append((project, number, patch))
        return self._update_issue_error

    def list_milestones(self, project: Project) -> list[Milestone] | GitHubAPIFailed:
        if self._list_milestones_error is not None:
            return self._list_milestones_error
        return list(self._milestones.get(str(project), []))

    def request_reviewers(
        self, project: Project, number: int, request: ReviewerRequest
    ) -> None | GitHubAPIFailed:
        self._reviewer_requests.append((project, number, request))
        return self._request_reviewers_error

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def created_pull_requests(self) -> list[tuple[Project, CreatePullRequestRequest]]:
        """Every create_pull_request() call, including failed attempts."""
        return list(self._created_pull_requests)

    @property
    def issue_updates(self) -> list[tuple[Project, int, IssueMetadataPatch]]:
        return list(self._issue_updates)

    @property
    def reviewer_requests(self) -> list[tuple[Project, int, ReviewerRequest]]:
        return list(self._reviewer_requests)
