"""Fake Editor implementation for testing."""

from collections.abc import Callable
from pathlib import Path

from pullreq.gateway.editor.abc import Editor


class FakeEditor(Editor):
    """Editor that rewrites the file with a scripted transformation.

    Constructor Injection:
    ---------------------
    - transform: Function from the file's current content to its edited content.
      Defaults to leaving the content unchanged (the user saved without edits).

    Mutation Tracking:
    -----------------
    - edited_contents: Content of the file as it was presented to the "user"
    """

    def __init__(self, *, transform: Callable[[str], str] | None = None) -> None:
        self._transform = transform
        self._edited_contents: list[str] = []

    def edit_file(self, path: Path) -> None:
        content = path.read_text(encoding="utf-8")
        self._edited_contents.append(content)
        if self._transform is not None:
            path.write_text(self._transform(content), encoding="utf-8")

    @property
    def edited_contents(self) -> list[str]:
        """Contents shown in each edit session, for test assertions."""
        return list(self._edited_contents)
