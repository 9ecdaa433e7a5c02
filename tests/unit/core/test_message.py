"""Tests for message source selection and title/body assembly."""

from pathlib import Path

import pytest

from pullreq.core.message import (
    EDIT_MESSAGE_FILENAME,
    AssembledMessage,
    ExplicitText,
    FromFile,
    InteractiveDefault,
    IssueConversion,
    MessageBuilder,
    SingleCommitNoEdit,
    assemble_message,
    parse_title_and_body,
    select_message_source,
    strip_signed_off_by,
)
from pullreq.core.refs import ResolvedRefs
from pullreq.core.types import EmptyTitle, NoCommitsFound
from pullreq.gateway.editor.fake import FakeEditor
from tests.test_utils.context_builders import OWNER_PROJECT, build_fake_git, build_test_context

REFS = ResolvedRefs(
    base_project=OWNER_PROJECT,
    base="main",
    head_project=OWNER_PROJECT,
    head="feature",
    base_tracking="origin/main",
    head_tracking="origin/feature",
    head_remote="origin",
    tracked_branch=None,
)


def _assemble(ctx, source, *, push=False, issue_number=None):
    return assemble_message(
        ctx, REFS, source, repo_root=ctx.cwd, push=push, issue_number=issue_number
    )


# ============================================================================
# select_message_source
# ============================================================================


def test_select_explicit_text_wins_over_everything() -> None:
    source = select_message_source(
        messages=("Title",), file="msg.txt", no_edit=True, edit=True, issue_number=3
    )

    assert source == ExplicitText(messages=("Title",), edit=True)


def test_select_file_wins_over_no_edit() -> None:
    source = select_message_source(
        messages=(), file="-", no_edit=True, edit=False, issue_number=None
    )

    assert source == FromFile(path="-", edit=False)


def test_select_no_edit() -> None:
    source = select_message_source(
        messages=(), file=None, no_edit=True, edit=False, issue_number=None
    )

    assert source == SingleCommitNoEdit()


def test_select_interactive_without_issue() -> None:
    source = select_message_source(
        messages=(), file=None, no_edit=False, edit=False, issue_number=None
    )

    assert source == InteractiveDefault()


def test_select_issue_conversion() -> None:
    source = select_message_source(
        messages=(), file=None, no_edit=False, edit=False, issue_number=42
    )

    assert source == IssueConversion(issue_number=42)


# ============================================================================
# Parsing
# ============================================================================


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("Title\n\nBody line", ("Title", "Body line")),
        ("Wrapped\ntitle\n\nFirst\n\nSecond\n", ("Wrapped title", "First\n\nSecond")),
        ("Title only", ("Title only", "")),
        ("\n\nno title here", ("", "no title here")),
        ("", ("", "")),
    ],
)
def test_parse_title_and_body(content: str, expected: tuple[str, str]) -> None:
    assert parse_title_and_body(content, comment_char=None) == expected


def test_parse_title_and_body_strips_comments() -> None:
    content = "Title\n# comment\n\nBody\n# another\n"

    assert parse_title_and_body(content, comment_char="#") == ("Title", "Body")


def test_parse_title_and_body_keeps_hash_lines_without_comment_char() -> None:
    _, body = parse_title_and_body("Title\n\n# Heading", comment_char=None)

    assert body == "# Heading"


def test_strip_signed_off_by() -> None:
    message = "Fix bug\n\nDetails\nSigned-off-by: Jane <jane@example.com>"

    assert strip_signed_off_by(message) == "Fix bug\n\nDetails"


def test_strip_signed_off_by_leaves_other_trailers() -> None:
    message = "Fix bug\n\nCo-authored-by: Jane <jane@example.com>"

    assert strip_signed_off_by(message) == message


def test_message_builder_annotations_use_comment_char(tmp_path: Path) -> None:
    editor = FakeEditor()
    builder = MessageBuilder(path=tmp_path / "MSG", comment_char=";", message="Title", edit=True)
    builder.add_annotation("first\n\nsecond")

    title, body = builder.extract(editor)

    assert editor.edited_contents == ["Title\n\n; first\n;\n; second\n"]
    assert (title, body) == ("Title", "")


# ============================================================================
# assemble_message
# ============================================================================


def test_explicit_text_joins_paragraphs_without_editing(tmp_path: Path) -> None:
    editor = FakeEditor()
    ctx = build_test_context(tmp_path, editor=editor)

    result = _assemble(ctx, ExplicitText(messages=("Title", "Para one", "Para two"), edit=False))

    assert isinstance(result, AssembledMessage)
    assert result.title == "Title"
    assert result.body == "Para one\n\nPara two"
    assert editor.edited_contents == []


def test_explicit_text_with_edit_shows_annotation(tmp_path: Path) -> None:
    editor = FakeEditor(transform=lambda content: content.replace("Draft", "Final"))
    ctx = build_test_context(tmp_path, editor=editor)

    result = _assemble(ctx, ExplicitText(messages=("Draft title",), edit=True))

    assert isinstance(result, AssembledMessage)
    assert result.title == "Final title"
    assert result.body == ""
    shown = editor.edited_contents[0]
    assert shown.startswith("Draft title\n\n")
    assert "# Requesting a pull to owner:main from owner:feature" in shown
    assert (tmp_path / ".git" / EDIT_MESSAGE_FILENAME).exists()


def test_from_file(tmp_path: Path) -> None:
    message_file = tmp_path / "message.md"
    message_file.write_text("From a file\n\n# Not a comment\n", encoding="utf-8")
    ctx = build_test_context(tmp_path)

    result = _assemble(ctx, FromFile(path=str(message_file), edit=False))

    assert isinstance(result, AssembledMessage)
    assert result.title == "From a file"
    assert result.body == "# Not a comment"


def test_single_commit_no_edit_uses_oldest_commit(tmp_path: Path) -> None:
    git = build_fake_git(
        tmp_path,
        commits_between={("origin/main", "feature"): ["newer", "oldest"]},
        commit_messages={"oldest": "First change\n\nWhy it matters", "newer": "Later"},
    )
    ctx = build_test_context(tmp_path, git=git)

    result = _assemble(ctx, SingleCommitNoEdit())

    assert isinstance(result, AssembledMessage)
    assert result.title == "First change"
    assert result.body == "Why it matters"


def test_single_commit_no_edit_without_commits(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)

    result = _assemble(ctx, SingleCommitNoEdit())

    assert result == NoCommitsFound(base="origin/main", head="feature")


def test_interactive_single_commit_prefills_message(tmp_path: Path) -> None:
    editor = FakeEditor()
    git = build_fake_git(
        tmp_path,
        commits_between={("origin/main", "origin/feature"): ["abc"]},
        commit_messages={"abc": "Add widget\n\nMore detail\nSigned-off-by: Jane <j@example.com>"},
    )
    ctx = build_test_context(tmp_path, git=git, editor=editor)

    result = _assemble(ctx, InteractiveDefault())

    assert isinstance(result, AssembledMessage)
    assert result.title == "Add widget"
    assert result.body == "More detail"
    assert "Signed-off-by" not in editor.edited_contents[0]


def test_interactive_reads_local_head_when_pushing(tmp_path: Path) -> None:
    git = build_fake_git(
        tmp_path,
        commits_between={("origin/main", "feature"): ["abc"]},
        commit_messages={"abc": "Local only"},
    )
    ctx = build_test_context(tmp_path, git=git)

    result = _assemble(ctx, InteractiveDefault(), push=True)

    assert isinstance(result, AssembledMessage)
    assert result.title == "Local only"


def test_interactive_multiple_commits_lists_changes_as_comments(tmp_path: Path) -> None:
    editor = FakeEditor(transform=lambda content: "Summary title\n" + content)
    git = build_fake_git(
        tmp_path,
        commits_between={("origin/main", "origin/feature"): ["b", "a"]},
        commit_logs={("origin/main", "origin/feature"): "b1 (Jane, 1 day ago)\n   Second\n"},
    )
    ctx = build_test_context(tmp_path, git=git, editor=editor)

    result = _assemble(ctx, InteractiveDefault())

    assert isinstance(result, AssembledMessage)
    assert result.title == "Summary title"
    assert result.body == ""
    shown = editor.edited_contents[0]
    assert "# Changes:" in shown
    assert "# b1 (Jane, 1 day ago)" in shown


def test_interactive_uses_template_when_message_empty(tmp_path: Path) -> None:
    editor = FakeEditor(transform=lambda content: "Templated" + content)
    git = build_fake_git(tmp_path, pull_request_template="Checklist:\n- [ ] tests")
    ctx = build_test_context(tmp_path, git=git, editor=editor)

    result = _assemble(ctx, InteractiveDefault())

    assert isinstance(result, AssembledMessage)
    assert result.title == "Templated"
    assert result.body == "Checklist:\n- [ ] tests"


def test_interactive_empty_title_aborts(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path, editor=FakeEditor(transform=lambda content: ""))

    result = _assemble(ctx, InteractiveDefault())

    assert isinstance(result, EmptyTitle)
    assert result.message == "Aborting due to empty pull request title"


def test_issue_conversion_allows_empty_title(tmp_path: Path) -> None:
    editor = FakeEditor()
    ctx = build_test_context(tmp_path, editor=editor)

    result = _assemble(ctx, IssueConversion(issue_number=7), issue_number=7)

    assert isinstance(result, AssembledMessage)
    assert result.title == ""
    assert editor.edited_contents == []


def test_cleanup_removes_edit_file(tmp_path: Path) -> None:
    ctx = build_test_context(tmp_path)

    result = _assemble(ctx, ExplicitText(messages=("Title",), edit=True))

    assert isinstance(result, AssembledMessage)
    result.builder.cleanup()
    assert not (tmp_path / ".git" / EDIT_MESSAGE_FILENAME).exists()
