"""Tests for remote URL, issue URL and API error parsing."""

import json

import pytest

from pullreq.gateway.github.parsing import (
    format_api_error,
    parse_api_error,
    parse_issue_number_from_url,
    parse_remote_url,
)
from pullreq.gateway.github.types import Project


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:owner/repo.git",
        "git@github.com:owner/repo",
        "https://github.com/owner/repo.git",
        "https://github.com/owner/repo",
        "ssh://git@github.com/owner/repo.git",
        "git://GitHub.com/owner/repo.git",
    ],
)
def test_parse_remote_url_variants(url: str) -> None:
    project = parse_remote_url(url)

    assert project == Project(host="github.com", owner="owner", name="repo")


def test_parse_remote_url_enterprise_host() -> None:
    project = parse_remote_url("git@git.example.com:team/svc.git")

    assert project == Project(host="git.example.com", owner="team", name="svc")


@pytest.mark.parametrize(
    "url",
    ["/srv/git/repo.git", "../sibling", "file:///srv/git/repo.git", "https://github.com/owner"],
)
def test_parse_remote_url_rejects_non_repository_urls(url: str) -> None:
    assert parse_remote_url(url) is None


def test_parse_issue_number_from_url() -> None:
    assert parse_issue_number_from_url("https://github.com/owner/repo/issues/123") == 123


def test_parse_issue_number_from_url_with_fragment() -> None:
    url = "https://github.com/owner/repo/issues/9#issuecomment-1"

    assert parse_issue_number_from_url(url) == 9


@pytest.mark.parametrize(
    "url",
    ["https://github.com/owner/repo/pull/123", "issues/123", "https://github.com/owner/repo"],
)
def test_parse_issue_number_from_url_rejects_other_urls(url: str) -> None:
    assert parse_issue_number_from_url(url) is None


def test_parse_api_error_with_field_errors() -> None:
    stdout = json.dumps(
        {
            "message": "Validation Failed",
            "errors": [{"resource": "PullRequest", "field": "head", "code": "invalid"}],
        }
    )

    details = parse_api_error(stdout, "gh: Validation Failed (HTTP 422)\n")

    assert details.status == 422
    assert details.invalid_fields == frozenset({"head"})
    assert format_api_error(details) == 'Validation Failed (HTTP 422)\nInvalid value for "head"'


def test_parse_api_error_custom_message() -> None:
    stdout = json.dumps(
        {
            "message": "Validation Failed",
            "errors": [
                {
                    "resource": "PullRequest",
                    "code": "custom",
                    "message": "A pull request already exists for owner:feature.",
                }
            ],
        }
    )

    details = parse_api_error(stdout, "gh: Validation Failed (HTTP 422)")

    assert details.field_errors == ("A pull request already exists for owner:feature.",)
    assert details.invalid_fields == frozenset()


def test_parse_api_error_without_body() -> None:
    details = parse_api_error("", "error connecting to api.github.com\n")

    assert details.status is None
    assert details.message == "error connecting to api.github.com"
    assert details.field_errors == ()
