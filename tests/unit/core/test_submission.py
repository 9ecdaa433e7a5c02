"""Tests for submission with invalid-head retry."""

from pathlib import Path

import pytest

from pullreq.core.submission import (
    DEFAULT_RETRY_ALLOWANCE,
    RETRY_TIMEOUT_ENV_VAR,
    RetryState,
    read_retry_allowance,
    submit,
)
from pullreq.core.types import PullRequestCreateFailed, PullRequestDraft
from pullreq.gateway.git.fake import PushedRef
from pullreq.gateway.git.types import PushError
from pullreq.gateway.github.fake import FakeGitHub
from pullreq.gateway.github.types import CreatePullRequestError, PullRequest
from pullreq.gateway.time.fake import FakeTime
from tests.test_utils.context_builders import OWNER_PROJECT, build_fake_git, build_test_context

REPO_ROOT = Path("/test/repo")
CREATED = PullRequest(number=12, url="https://github.com/owner/repo/pull/12")
INVALID_HEAD = CreatePullRequestError(
    message='Error creating pull request: Validation Failed (HTTP 422)\nInvalid value for "head"',
    status=422,
    is_invalid_head=True,
)
ALREADY_EXISTS = CreatePullRequestError(
    message="Error creating pull request: A pull request already exists for owner:feature.",
    status=422,
)

DRAFT = PullRequestDraft(
    base_project=OWNER_PROJECT,
    base="main",
    head_project=OWNER_PROJECT,
    head="feature",
    title="Add feature",
    body="",
    draft=False,
)


# ============================================================================
# Retry allowance
# ============================================================================


def test_read_retry_allowance_default() -> None:
    assert read_retry_allowance({}) == DEFAULT_RETRY_ALLOWANCE
    assert read_retry_allowance({RETRY_TIMEOUT_ENV_VAR: ""}) == DEFAULT_RETRY_ALLOWANCE


def test_read_retry_allowance_override() -> None:
    assert read_retry_allowance({RETRY_TIMEOUT_ENV_VAR: "30"}) == 30


def test_read_retry_allowance_negative_disables_retry() -> None:
    assert read_retry_allowance({RETRY_TIMEOUT_ENV_VAR: "-5"}) == 0


def test_read_retry_allowance_rejects_non_integer() -> None:
    with pytest.raises(ValueError, match=RETRY_TIMEOUT_ENV_VAR):
        read_retry_allowance({RETRY_TIMEOUT_ENV_VAR: "soon"})


def test_retry_state_delay_grows_and_allowance_shrinks() -> None:
    state = RetryState(allowance=9).advance().advance()

    assert state == RetryState(allowance=4, delay=4, retries=2)
    assert state.can_retry
    assert not state.advance().can_retry


# ============================================================================
# submit
# ============================================================================


def test_submit_without_push_creates_once() -> None:
    github = FakeGitHub(create_results=[CREATED])
    git = build_fake_git(REPO_ROOT)
    ctx = build_test_context(REPO_ROOT, git=git, github=github)

    result = submit(ctx, DRAFT, push_remote=None, environ={})

    assert result == CREATED
    assert git.pushed_refs == []
    project, request = github.created_pull_requests[0]
    assert project == OWNER_PROJECT
    assert request.head == "owner:feature"
    assert request.base == "main"
    assert request.title == "Add feature"


def test_submit_pushes_head_before_creating() -> None:
    git = build_fake_git(REPO_ROOT)
    ctx = build_test_context(REPO_ROOT, git=git, github=FakeGitHub(create_results=[CREATED]))

    result = submit(ctx, DRAFT, push_remote="origin", environ={})

    assert result == CREATED
    assert git.pushed_refs == [
        PushedRef(remote="origin", refspec="HEAD:feature", set_upstream=True)
    ]


def test_submit_push_failure_skips_creation() -> None:
    github = FakeGitHub()
    git = build_fake_git(REPO_ROOT, push_error=PushError(message="rejected"))
    ctx = build_test_context(REPO_ROOT, git=git, github=github)

    result = submit(ctx, DRAFT, push_remote="origin", environ={})

    assert result == PushError(message="rejected")
    assert github.created_pull_requests == []


def test_submit_retries_invalid_head_after_push() -> None:
    time = FakeTime()
    github = FakeGitHub(create_results=[INVALID_HEAD, INVALID_HEAD, CREATED])
    ctx = build_test_context(REPO_ROOT, github=github, time=time)

    result = submit(ctx, DRAFT, push_remote="origin", environ={})

    assert result == CREATED
    assert time.sleep_calls == [2, 3]
    assert len(github.created_pull_requests) == 3


def test_submit_gives_up_when_allowance_runs_out() -> None:
    time = FakeTime()
    github = FakeGitHub(create_results=[INVALID_HEAD])
    ctx = build_test_context(REPO_ROOT, github=github, time=time)

    result = submit(ctx, DRAFT, push_remote="origin", environ={})

    assert isinstance(result, PullRequestCreateFailed)
    assert time.sleep_calls == [2, 3, 4]
    assert result.retries == 3
    assert result.transient
    assert result.elapsed_seconds == 9.0
    assert result.message.startswith(INVALID_HEAD.message)
    assert result.message.endswith("Given up after retrying 3 times over 9.0 seconds.")
    assert len(github.created_pull_requests) == 4


def test_submit_respects_allowance_override() -> None:
    time = FakeTime()
    ctx = build_test_context(
        REPO_ROOT, github=FakeGitHub(create_results=[INVALID_HEAD]), time=time
    )

    result = submit(ctx, DRAFT, push_remote="origin", environ={RETRY_TIMEOUT_ENV_VAR: "1"})

    assert isinstance(result, PullRequestCreateFailed)
    assert time.sleep_calls == [2]
    assert result.retries == 1


def test_submit_zero_allowance_fails_without_annotation() -> None:
    time = FakeTime()
    ctx = build_test_context(
        REPO_ROOT, github=FakeGitHub(create_results=[INVALID_HEAD]), time=time
    )

    result = submit(ctx, DRAFT, push_remote="origin", environ={RETRY_TIMEOUT_ENV_VAR: "0"})

    assert isinstance(result, PullRequestCreateFailed)
    assert time.sleep_calls == []
    assert result.message == INVALID_HEAD.message


def test_submit_does_not_retry_invalid_head_without_push() -> None:
    time = FakeTime()
    github = FakeGitHub(create_results=[INVALID_HEAD])
    ctx = build_test_context(REPO_ROOT, github=github, time=time)

    result = submit(ctx, DRAFT, push_remote=None, environ={})

    assert isinstance(result, PullRequestCreateFailed)
    assert result.retries == 0
    assert time.sleep_calls == []
    assert len(github.created_pull_requests) == 1


def test_submit_does_not_retry_other_errors() -> None:
    time = FakeTime()
    github = FakeGitHub(create_results=[ALREADY_EXISTS])
    ctx = build_test_context(REPO_ROOT, github=github, time=time)

    result = submit(ctx, DRAFT, push_remote="origin", environ={})

    assert isinstance(result, PullRequestCreateFailed)
    assert not result.transient
    assert result.message == ALREADY_EXISTS.message
    assert time.sleep_calls == []


def test_submit_issue_conversion_sends_issue_instead_of_title() -> None:
    github = FakeGitHub()
    ctx = build_test_context(REPO_ROOT, github=github)
    draft = PullRequestDraft(
        base_project=OWNER_PROJECT,
        base="main",
        head_project=OWNER_PROJECT,
        head="feature",
        title="",
        body="",
        draft=True,
        issue_number=42,
    )

    submit(ctx, draft, push_remote=None, environ={})

    _, request = github.created_pull_requests[0]
    assert request.to_payload() == {
        "base": "main",
        "head": "owner:feature",
        "draft": True,
        "issue": 42,
    }
