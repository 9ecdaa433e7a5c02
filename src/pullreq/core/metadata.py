"""Apply labels, assignees, milestone and reviewers to a created pull request.

The issue patch and the reviewer request are independent: one failing does not
stop the other, and neither undoes the creation.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pullreq.core.context import PullReqContext
from pullreq.core.types import MilestoneNotFound
from pullreq.gateway.github.types import (
    GitHubAPIFailed,
    IssueMetadataPatch,
    Project,
    PullRequest,
    ReviewerRequest,
)

logger = logging.getLogger(__name__)


def comma_separated(values: Iterable[str]) -> list[str]:
    """Flatten repeated option values that may each hold a comma-separated list."""
    result = []
    for value in values:
        result.extend(item.strip() for item in value.split(",") if item.strip())
    return result


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    result = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            result.append(value)
    return tuple(result)


def resolve_milestone(
    ctx: PullReqContext, project: Project, token: str
) -> int | MilestoneNotFound | GitHubAPIFailed:
    """Turn a milestone name or number into a milestone number.

    Numbers are used as-is for backwards compatibility. Names are matched
    case-insensitively against the full title.
    """
    try:
        return int(token)
    except ValueError:
        pass

    milestones = ctx.github.list_milestones(project)
    if isinstance(milestones, GitHubAPIFailed):
        return milestones
    wanted = token.casefold()
    for milestone in milestones:
        if milestone.title.casefold() == wanted:
            return milestone.number
    return MilestoneNotFound(name=token)


def build_issue_patch(
    *, labels: Iterable[str], assignees: Iterable[str], milestone: int | None
) -> IssueMetadataPatch | None:
    """Merge labels, assignees and milestone into one patch, or None if empty."""
    patch = IssueMetadataPatch(
        labels=_dedupe(labels),
        assignees=_dedupe(assignees),
        milestone=milestone if milestone is not None and milestone > 0 else None,
    )
    if patch.is_empty:
        return None
    return patch


def build_reviewer_request(
    tokens: Iterable[str], pull_request: PullRequest
) -> ReviewerRequest | None:
    """Split reviewer tokens into users and teams, minus those already requested.

    "org/team" names a team (only the part after the first "/" is sent);
    anything else is a user login. Returns None when nothing is left to request.
    """
    present_users = {login.lower() for login in pull_request.requested_reviewers}
    present_teams = {slug.lower() for slug in pull_request.requested_teams}

    users: list[str] = []
    teams: list[str] = []
    for token in tokens:
        if "/" in token:
            team = token.split("/", 1)[1]
            if team and team.lower() not in present_teams:
                teams.append(team)
        elif token and token.lower() not in present_users:
            users.append(token)

    request = ReviewerRequest(reviewers=_dedupe(users), team_reviewers=_dedupe(teams))
    if request.is_empty:
        return None
    return request


@dataclass(frozen=True)
class MetadataOutcome:
    """What was sent after creation, and what failed."""

    patch: IssueMetadataPatch | None
    reviewer_request: ReviewerRequest | None
    failures: tuple[GitHubAPIFailed, ...]

    @property
    def succeeded(self) -> bool:
        return not self.failures


def apply_metadata(
    ctx: PullReqContext,
    project: Project,
    pull_request: PullRequest,
    *,
    labels: Iterable[str],
    assignees: Iterable[str],
    milestone: int | None,
    reviewers: Iterable[str],
) -> MetadataOutcome:
    """Send the issue patch and the reviewer request, each only if non-empty."""
    failures: list[GitHubAPIFailed] = []

    patch = build_issue_patch(labels=labels, assignees=assignees, milestone=milestone)
    if patch is not None:
        logger.debug("patching %s#%d: %s", project, pull_request.number, patch)
        error = ctx.github.update_issue(project, pull_request.number, patch)
        if error is not None:
            failures.append(error)

    request = build_reviewer_request(reviewers, pull_request)
    if request is not None:
        logger.debug("requesting reviews on %s#%d: %s", project, pull_request.number, request)
        error = ctx.github.request_reviewers(project, pull_request.number, request)
        if error is not None:
            failures.append(error)

    return MetadataOutcome(patch=patch, reviewer_request=request, failures=tuple(failures))
