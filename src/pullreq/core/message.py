"""Assemble the pull request title and body.

Exactly one message source is used per invocation. select_message_source()
picks it by priority and returns one variant of MessageSource; assemble_message()
turns that variant into a title and body, opening the editor when required.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import click

from pullreq.core.context import PullReqContext
from pullreq.core.refs import ResolvedRefs
from pullreq.core.types import EmptyTitle, NoCommitsFound
from pullreq.gateway.editor.abc import Editor

logger = logging.getLogger(__name__)

EDIT_MESSAGE_FILENAME = "PULLREQ_EDITMSG"
STDIN_FILENAME = "-"

_SIGNED_OFF_BY = re.compile(r"\nSigned-off-by:\s.*\Z")
_NON_SPACE = re.compile(r"\S")


# ============================================================================
# Message sources
# ============================================================================


@dataclass(frozen=True)
class ExplicitText:
    """One or more --message values, each a paragraph."""

    messages: tuple[str, ...]
    edit: bool


@dataclass(frozen=True)
class FromFile:
    """Message read from a file, or from stdin when path is "-"."""

    path: str
    edit: bool


@dataclass(frozen=True)
class SingleCommitNoEdit:
    """Message of the oldest commit on the branch, used without editing."""


@dataclass(frozen=True)
class InteractiveDefault:
    """Computed default content, always edited."""


@dataclass(frozen=True)
class IssueConversion:
    """Convert an existing issue; no message needed."""

    issue_number: int


MessageSource = ExplicitText | FromFile | SingleCommitNoEdit | InteractiveDefault | IssueConversion


def select_message_source(
    *,
    messages: tuple[str, ...],
    file: str | None,
    no_edit: bool,
    edit: bool,
    issue_number: int | None,
) -> MessageSource:
    """Pick the message source; the first match wins.

    Priority: explicit text, file, --no-edit, interactive default, issue conversion.
    """
    if messages:
        return ExplicitText(messages=messages, edit=edit)
    if file is not None:
        return FromFile(path=file, edit=edit)
    if no_edit:
        return SingleCommitNoEdit()
    if issue_number is None:
        return InteractiveDefault()
    return IssueConversion(issue_number=issue_number)


# ============================================================================
# Editable message
# ============================================================================


class MessageBuilder:
    """Staged message content plus annotations shown only while editing.

    Annotations are written as comment lines and never become part of the
    title or body.
    """

    def __init__(self, *, path: Path, comment_char: str, message: str = "", edit: bool = False):
        self.path = path
        self.comment_char = comment_char
        self.message = message
        self.edit = edit
        self._annotations: list[str] = []

    def add_annotation(self, text: str) -> None:
        self._annotations.append(text)

    def _render_annotations(self) -> str:
        lines = []
        for annotation in self._annotations:
            for line in annotation.split("\n"):
                lines.append(f"{self.comment_char} {line}" if line else self.comment_char)
        return "\n".join(lines)

    def extract(self, editor: Editor) -> tuple[str, str]:
        """Return (title, body), running an edit session first if required."""
        if not self.edit:
            return parse_title_and_body(self.message, comment_char=None)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = self.message
        annotations = self._render_annotations()
        if annotations:
            content = f"{content}\n\n{annotations}\n"
        self.path.write_text(content, encoding="utf-8")
        editor.edit_file(self.path)
        edited = self.path.read_text(encoding="utf-8")
        return parse_title_and_body(edited, comment_char=self.comment_char)

    def cleanup(self) -> None:
        """Remove the edit file. Call only once the pull request exists."""
        self.path.unlink(missing_ok=True)


def parse_title_and_body(content: str, *, comment_char: str | None) -> tuple[str, str]:
    """Split content into title (first paragraph) and body (the rest).

    Title lines are joined with spaces. Once a blank line is seen, everything
    else is body, so content starting with blank lines has an empty title.
    Lines starting with comment_char are dropped when it is given.
    """
    title_parts: list[str] = []
    body_parts: list[str] = []
    for line in content.splitlines():
        if comment_char and line.startswith(comment_char):
            continue
        if not body_parts and _NON_SPACE.search(line):
            title_parts.append(line)
        else:
            body_parts.append(line)
    return " ".join(title_parts).strip(), "\n".join(body_parts).strip()


def strip_signed_off_by(message: str) -> str:
    """Drop a trailing Signed-off-by: trailer line."""
    return _SIGNED_OFF_BY.sub("", message)


def read_message_file(path: str) -> str:
    if path == STDIN_FILENAME:
        return click.get_text_stream("stdin").read()
    return Path(path).read_text(encoding="utf-8")


# ============================================================================
# Assembly
# ============================================================================


@dataclass(frozen=True)
class AssembledMessage:
    title: str
    body: str
    builder: MessageBuilder


def assemble_message(
    ctx: PullReqContext,
    refs: ResolvedRefs,
    source: MessageSource,
    *,
    repo_root: Path,
    push: bool,
    issue_number: int | None,
) -> AssembledMessage | NoCommitsFound | EmptyTitle:
    """Resolve the message source into a title and body.

    Args:
        ctx: Application context
        refs: Resolved base and head
        source: Selected message source
        repo_root: Working tree root, searched for a pull request template
        push: Whether the head will be pushed first (commits are then read from
            the local head instead of its remote-tracking copy)
        issue_number: Issue being converted, if any; allows an empty title
    """
    builder = MessageBuilder(
        path=ctx.git.get_git_dir(ctx.cwd) / EDIT_MESSAGE_FILENAME,
        comment_char=ctx.git.get_comment_char(ctx.cwd),
    )
    builder.add_annotation(
        f"Requesting a pull to {refs.qualified_base} from {refs.qualified_head}\n"
        "\n"
        "Write a message for this pull request. The first block\n"
        "of text is the title and the rest is the description."
    )
    logger.debug("message source: %s", type(source).__name__)

    if isinstance(source, ExplicitText):
        builder.message = "\n\n".join(source.messages)
        builder.edit = source.edit
    elif isinstance(source, FromFile):
        builder.message = read_message_file(source.path)
        builder.edit = source.edit
    elif isinstance(source, SingleCommitNoEdit):
        commits = ctx.git.list_commits_between(ctx.cwd, refs.base_tracking, refs.head)
        if not commits:
            return NoCommitsFound(base=refs.base_tracking, head=refs.head)
        builder.message = ctx.git.get_commit_message(ctx.cwd, commits[-1])
    elif isinstance(source, InteractiveDefault):
        builder.edit = True
        builder.message = _interactive_default(ctx, builder, refs, repo_root=repo_root, push=push)

    title, body = builder.extract(ctx.editor)
    if not title and issue_number is None:
        return EmptyTitle()
    return AssembledMessage(title=title, body=body, builder=builder)


def _interactive_default(
    ctx: PullReqContext,
    builder: MessageBuilder,
    refs: ResolvedRefs,
    *,
    repo_root: Path,
    push: bool,
) -> str:
    head_for_message = refs.head if push else refs.head_tracking
    commits = ctx.git.list_commits_between(ctx.cwd, refs.base_tracking, head_for_message)

    message = ""
    if len(commits) == 1:
        message = strip_signed_off_by(ctx.git.get_commit_message(ctx.cwd, commits[0]))
    elif len(commits) > 1:
        log = ctx.git.get_commit_log(ctx.cwd, refs.base_tracking, head_for_message).strip()
        if log:
            builder.add_annotation(f"\nChanges:\n\n{log}")

    if not message:
        template = ctx.git.read_pull_request_template(repo_root)
        if template:
            message = f"{message}\n\n\n{template}"
    return message
