"""Submit a pull request draft, retrying while a fresh push becomes visible.

Right after a push, the API may still reject the head ref as invalid. When the
head was pushed by this invocation, creation is retried with a growing delay
until a time allowance runs out.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pullreq.core.context import PullReqContext
from pullreq.core.types import PullRequestCreateFailed, PullRequestDraft
from pullreq.gateway.git.types import PushError
from pullreq.gateway.github.types import CreatePullRequestError, PullRequest

logger = logging.getLogger(__name__)

RETRY_TIMEOUT_ENV_VAR = "PULLREQ_RETRY_TIMEOUT"
DEFAULT_RETRY_ALLOWANCE = 9
INITIAL_RETRY_DELAY = 2


def read_retry_allowance(environ: Mapping[str, str]) -> int:
    """Read the retry allowance in seconds from the environment.

    Raises:
        ValueError: If the variable is set to something other than an integer
    """
    raw = environ.get(RETRY_TIMEOUT_ENV_VAR, "")
    if not raw:
        return DEFAULT_RETRY_ALLOWANCE
    try:
        allowance = int(raw)
    except ValueError:
        msg = f"{RETRY_TIMEOUT_ENV_VAR} must be an integer number of seconds, got {raw!r}"
        raise ValueError(msg) from None
    return max(allowance, 0)


@dataclass(frozen=True)
class RetryState:
    """Remaining allowance, next delay and retries so far.

    The allowance only ever decreases; the delay grows by one after each retry.
    """

    allowance: int
    delay: int = INITIAL_RETRY_DELAY
    retries: int = 0

    @property
    def can_retry(self) -> bool:
        return self.allowance > 0

    def advance(self) -> RetryState:
        return RetryState(
            allowance=self.allowance - self.delay,
            delay=self.delay + 1,
            retries=self.retries + 1,
        )


def submit(
    ctx: PullReqContext,
    draft: PullRequestDraft,
    *,
    push_remote: str | None,
    environ: Mapping[str, str],
) -> PullRequest | PushError | PullRequestCreateFailed:
    """Optionally push the head, then create the pull request.

    Args:
        ctx: Application context
        draft: The pull request to create
        push_remote: Remote to push the head to first, or None to skip pushing
        environ: Environment holding the retry allowance override; read only
            when pushing

    Returns:
        The created pull request, or why it could not be created. A push that
        succeeded stays pushed even when creation fails.
    """
    allowance = 0
    if push_remote is not None:
        allowance = read_retry_allowance(environ)
        push_result = ctx.git.push_to_remote(
            ctx.cwd, push_remote, f"HEAD:{draft.head}", set_upstream=True
        )
        if isinstance(push_result, PushError):
            return push_result

    return create_with_retry(ctx, draft, RetryState(allowance=allowance))


def create_with_retry(
    ctx: PullReqContext, draft: PullRequestDraft, state: RetryState
) -> PullRequest | PullRequestCreateFailed:
    """Call create, retrying the invalid-head error class while the allowance lasts."""
    request = draft.to_request()
    started_at = ctx.time.now()

    while True:
        result = ctx.github.create_pull_request(draft.base_project, request)
        if not isinstance(result, CreatePullRequestError):
            return result

        if not result.is_invalid_head or not state.can_retry:
            break

        logger.debug(
            "head %s not visible yet, retrying in %ds (allowance %ds)",
            request.head,
            state.delay,
            state.allowance,
        )
        ctx.time.sleep(state.delay)
        state = state.advance()

    elapsed = (ctx.time.now() - started_at).total_seconds()
    message = result.message
    if state.retries > 0:
        message = (
            f"{message}\nGiven up after retrying {state.retries} times "
            f"over {elapsed:.1f} seconds."
        )
    return PullRequestCreateFailed(
        message=message,
        transient=result.is_invalid_head,
        retries=state.retries,
        elapsed_seconds=elapsed,
    )
