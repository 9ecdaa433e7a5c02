"""Production implementation of GitHub operations using the gh CLI.

Every call goes through `gh api`, which owns authentication. Request payloads
are sent as JSON on stdin; response bodies are read from stdout.

gh being missing, hanging or printing something other than JSON is reported as
a failed call, the same as an API error.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from pullreq.gateway.github.abc import GitHub
from pullreq.gateway.github.parsing import format_api_error, parse_api_error
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

logger = logging.getLogger(__name__)

# Timeout in seconds for a single gh api call.
_GH_COMMAND_TIMEOUT = 60

_INVALID_HEAD_MESSAGE = 'Invalid value for "head"'

# Raised by subprocess.run or while decoding a response
_GH_CALL_ERRORS = (subprocess.TimeoutExpired, FileNotFoundError, json.JSONDecodeError)


def _build_gh_api_command(
    project: Project,
    path: str,
    *,
    method: str = "GET",
    has_input: bool = False,
    jq: str | None = None,
) -> list[str]:
    cmd = ["gh", "api", "--hostname", project.host, "--method", method]
    if has_input:
        cmd.extend(["--input", "-"])
    if jq is not None:
        cmd.extend(["--paginate", "--jq", jq])
    cmd.append(path)
    return cmd


def _run_gh_api(cmd: list[str], payload: dict[str, Any] | None) -> subprocess.CompletedProcess[str]:
    logger.debug("gh api: %s", " ".join(cmd))
    return subprocess.run(
        cmd,
        input=json.dumps(payload) if payload is not None else None,
        capture_output=True,
        text=True,
        check=False,
        timeout=_GH_COMMAND_TIMEOUT,
    )


def _describe_call_error(error: Exception) -> str:
    if isinstance(error, subprocess.TimeoutExpired):
        return f"gh api did not respond within {_GH_COMMAND_TIMEOUT}s"
    if isinstance(error, FileNotFoundError):
        return "gh CLI not found (install it from https://cli.github.com)"
    return f"unexpected response from gh api: {error}"


def _api_failure(context: str, result: subprocess.CompletedProcess[str]) -> GitHubAPIFailed:
    details = parse_api_error(result.stdout, result.stderr)
    return GitHubAPIFailed(
        message=f"Error {context}: {format_api_error(details)}", status=details.status
    )


class RealGitHub(GitHub):
    """Production implementation using `gh api` via subprocess."""

    def get_repository(self, project: Project) -> RepositoryInfo | RepositoryNotFound:
        try:
            result = _run_gh_api(_build_gh_api_command(project, project.api_path), None)
            if result.returncode != 0:
                details = parse_api_error(result.stdout, result.stderr)
                return RepositoryNotFound(project=project, message=format_api_error(details))
            data = json.loads(result.stdout)
        except _GH_CALL_ERRORS as e:
            return RepositoryNotFound(project=project, message=_describe_call_error(e))
        return RepositoryInfo(owner=data["owner"]["login"], name=data["name"])

    def create_pull_request(
        self, project: Project, request: CreatePullRequestRequest
    ) -> PullRequest | CreatePullRequestError:
        cmd = _build_gh_api_command(
            project, f"{project.api_path}/pulls", method="POST", has_input=True
        )
        try:
            result = _run_gh_api(cmd, request.to_payload())
            if result.returncode == 0:
                return _parse_pull_request(json.loads(result.stdout))
        except _GH_CALL_ERRORS as e:
            return CreatePullRequestError(
                message=f"Error creating pull request: {_describe_call_error(e)}"
            )

        details = parse_api_error(result.stdout, result.stderr)
        message = format_api_error(details)
        return CreatePullRequestError(
            message=f"Error creating pull request: {message}",
            status=details.status,
            is_invalid_head="head" in details.invalid_fields or _INVALID_HEAD_MESSAGE in message,
            field_errors=details.field_errors,
        )

    def update_issue(
        self, project: Project, number: int, patch: IssueMetadataPatch
    ) -> None | GitHubAPIFailed:
        cmd = _build_gh_api_command(
            project, f"{project.api_path}/issues/{number}", method="PATCH", has_input=True
        )
        try:
            result = _run_gh_api(cmd, patch.to_payload())
        except _GH_CALL_ERRORS as e:
            return GitHubAPIFailed(message=f"Error updating issue: {_describe_call_error(e)}")
        if result.returncode != 0:
            return _api_failure("updating issue", result)
        return None

    def list_milestones(self, project: Project) -> list[Milestone] | GitHubAPIFailed:
        cmd = _build_gh_api_command(
            project,
            f"{project.api_path}/milestones?per_page=100",
            jq=".[] | {number, title} | @json",
        )
        try:
            result = _run_gh_api(cmd, None)
            if result.returncode != 0:
                return _api_failure("fetching milestones", result)
            milestones = []
            for line in result.stdout.splitlines():
                if not line.strip():
                    continue
                data = json.loads(line)
                milestones.append(Milestone(number=data["number"], title=data["title"]))
        except _GH_CALL_ERRORS as e:
            return GitHubAPIFailed(message=f"Error fetching milestones: {_describe_call_error(e)}")
        return milestones

    def request_reviewers(
        self, project: Project, number: int, request: ReviewerRequest
    ) -> None | GitHubAPIFailed:
        cmd = _build_gh_api_command(
            project,
            f"{project.api_path}/pulls/{number}/requested_reviewers",
            method="POST",
            has_input=True,
        )
        try:
            result = _run_gh_api(cmd, request.to_payload())
        except _GH_CALL_ERRORS as e:
            return GitHubAPIFailed(
                message=f"Error requesting reviewers: {_describe_call_error(e)}"
            )
        if result.returncode != 0:
            return _api_failure("requesting reviewers", result)
        return None


def _parse_pull_request(data: dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=data["number"],
        url=data["html_url"],
        requested_reviewers=tuple(
            user["login"] for user in data.get("requested_reviewers") or []
        ),
        requested_teams=tuple(team["slug"] for team in data.get("requested_teams") or []),
    )
