"""No-op GitHub wrapper for dry-run mode.

Read-only operations are delegated to the wrapped implementation; mutations
print what would happen and return placeholder results.
"""

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
from pullreq.output import user_output

DRY_RUN_PULL_REQUEST_URL = "PULL_REQUEST_URL"


class DryRunGitHub(GitHub):
    """No-op wrapper that prevents remote mutations.

    Usage:
        noop_github = DryRunGitHub(RealGitHub())

        # Query operations work normally
        milestones = noop_github.list_milestones(project)

        # Mutation operations only report
        noop_github.create_pull_request(project, request)
    """

    def __init__(self, wrapped: GitHub) -> None:
        self._wrapped = wrapped

    # ============================================================================
    # Mutation Operations (no-ops in dry-run mode)
    # ============================================================================

    def create_pull_request(
        self, project: Project, request: CreatePullRequestRequest
    ) -> PullRequest | CreatePullRequestError:
        user_output(
            f"Would request a pull request to {project.owner}:{request.base} from {request.head}"
        )
        return PullRequest(number=0, url=DRY_RUN_PULL_REQUEST_URL)

    def update_issue(
        self, project: Project, number: int, patch: IssueMetadataPatch
    ) -> None | GitHubAPIFailed:
        user_output(f"Would update metadata of {project}#{number}")
        return None

    def request_reviewers(
        self, project: Project, number: int, request: ReviewerRequest
    ) -> None | GitHubAPIFailed:
        user_output(f"Would request reviews on {project}#{number}")
        return None

    # ============================================================================
    # Query Operations (delegate to wrapped implementation)
    # ============================================================================

    def get_repository(self, project: Project) -> RepositoryInfo | RepositoryNotFound:
        return self._wrapped.get_repository(project)

    def list_milestones(self, project: Project) -> list[Milestone] | GitHubAPIFailed:
        return self._wrapped.list_milestones(project)
