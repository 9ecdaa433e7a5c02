"""Create a pull request for the current branch.

The workflow:
1. Resolve base and head from flags, remotes and the branch's upstream
2. Assemble the title and body from the highest-priority message source
3. Optionally push, then create the pull request (retrying while a fresh push
   is not visible yet)
4. Apply labels, assignees, milestone and reviewers
"""

import logging
import os

import click

from pullreq.cli.ensure_ideal import EnsureIdeal
from pullreq.core.context import PullReqContext
from pullreq.core.message import assemble_message, select_message_source
from pullreq.core.metadata import apply_metadata, comma_separated, resolve_milestone
from pullreq.core.refs import read_local_state, resolve_refs
from pullreq.core.submission import submit
from pullreq.core.types import PullRequestDraft
from pullreq.gateway.github.parsing import parse_issue_number_from_url
from pullreq.output import machine_output, user_output

logger = logging.getLogger(__name__)


def _present_url(ctx: PullReqContext, url: str, *, browse: bool, copy: bool) -> None:
    if browse:
        ctx.browser.launch(url)
    if copy and not ctx.clipboard.copy(url):
        user_output(click.style("Warning: ", fg="yellow") + "clipboard not available")
        machine_output(url)
    if not browse and not copy:
        machine_output(url)


@click.command("create", context_settings={"help_option_names": ["--help"]})
@click.option("-f", "--force", is_flag=True, help="Skip the check for unpushed commits.")
@click.option(
    "-m",
    "--message",
    "messages",
    multiple=True,
    help="Title, blank line, description. Repeat to add paragraphs.",
)
@click.option(
    "--no-edit",
    is_flag=True,
    help="Use the first commit's message on the branch without opening an editor.",
)
@click.option(
    "-F",
    "--file",
    "message_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    help='Read the message from FILE ("-" for stdin).',
)
@click.option("-e", "--edit", is_flag=True, help="Edit the --message/--file text further.")
@click.option("-i", "--issue", type=int, help="Convert ISSUE (by number) to a pull request.")
@click.option("-o", "--browse", is_flag=True, help="Open the new pull request in a browser.")
@click.option("-c", "--copy", is_flag=True, help="Copy the URL instead of printing it.")
@click.option("-p", "--push", is_flag=True, help="Push the current branch to HEAD first.")
@click.option("-b", "--base", help='Base branch in "[OWNER[/NAME]:]BRANCH" format.')
@click.option("-h", "--head", help='Head branch in "[OWNER[/NAME]:]BRANCH" format.')
@click.option(
    "-r", "--reviewer", "reviewers", multiple=True, help="Comma-separated users or ORG/TEAMs."
)
@click.option("-a", "--assign", "assignees", multiple=True, help="Comma-separated users.")
@click.option("-M", "--milestone", help="Milestone name (a number is accepted too).")
@click.option("-l", "--labels", multiple=True, help="Comma-separated labels.")
@click.option("-d", "--draft", is_flag=True, help="Create the pull request as a draft.")
@click.argument("issue_url", required=False)
@click.pass_obj
def create_cmd(
    ctx: PullReqContext,
    force: bool,
    messages: tuple[str, ...],
    no_edit: bool,
    message_file: str | None,
    edit: bool,
    issue: int | None,
    browse: bool,
    copy: bool,
    push: bool,
    base: str | None,
    head: str | None,
    reviewers: tuple[str, ...],
    assignees: tuple[str, ...],
    milestone: str | None,
    labels: tuple[str, ...],
    draft: bool,
    issue_url: str | None,
) -> None:
    """Create a pull request.

    The first paragraph of the message is the title, the rest the description.
    Without --message, --file or --no-edit an editor opens with the branch's
    commits as a starting point.

    Examples:

    \b
      # Write the message in an editor
      pullreq create

    \b
      # Explicit base and head
      pullreq create --base OWNER:main --head MYUSER:my-branch

    \b
      # Edit a message piped on stdin
      pullreq create -F - --edit < message.md

    \b
    Environment:
      PULLREQ_RETRY_TIMEOUT  Seconds to keep retrying creation after --push
                             while GitHub does not see the branch (default 9)
    """
    issue_number = issue
    if issue_number is None and issue_url is not None:
        issue_number = parse_issue_number_from_url(issue_url)

    state = read_local_state(ctx)
    refs = EnsureIdeal.ideal_state(
        resolve_refs(ctx, state, base_spec=base, head_spec=head, push=push, force=force)
    )

    source = select_message_source(
        messages=messages,
        file=message_file,
        no_edit=no_edit,
        edit=edit,
        issue_number=issue_number,
    )
    assembled = EnsureIdeal.ideal_state(
        assemble_message(
            ctx, refs, source, repo_root=state.repo_root, push=push, issue_number=issue_number
        )
    )

    milestone_number = None
    if milestone:
        milestone_number = EnsureIdeal.ideal_state(
            resolve_milestone(ctx, refs.base_project, milestone)
        )

    pull_request_draft = PullRequestDraft(
        base_project=refs.base_project,
        base=refs.base,
        head_project=refs.head_project,
        head=refs.head,
        title=assembled.title,
        body=assembled.body,
        draft=draft,
        issue_number=issue_number,
    )
    logger.debug(
        "submitting %s -> %s (draft=%s)",
        pull_request_draft.qualified_head,
        pull_request_draft.qualified_base,
        draft,
    )

    try:
        result = submit(
            ctx,
            pull_request_draft,
            push_remote=refs.head_remote if push else None,
            environ=os.environ,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    pull_request = EnsureIdeal.ideal_state(result)
    assembled.builder.cleanup()

    outcome = apply_metadata(
        ctx,
        refs.base_project,
        pull_request,
        labels=comma_separated(labels),
        assignees=comma_separated(assignees),
        milestone=milestone_number,
        reviewers=comma_separated(reviewers),
    )
    for failure in outcome.failures:
        user_output(click.style("Error: ", fg="red") + failure.message)

    _present_url(ctx, pull_request.url, browse=browse, copy=copy)

    if not outcome.succeeded:
        raise SystemExit(1)
