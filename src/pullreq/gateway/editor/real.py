"""Real Editor implementation using click.edit."""

import os
from pathlib import Path

import click

from pullreq.gateway.editor.abc import Editor


class RealEditor(Editor):
    """Production implementation honoring $GIT_EDITOR, then $VISUAL and $EDITOR via click."""

    def edit_file(self, path: Path) -> None:
        click.edit(filename=str(path), editor=os.environ.get("GIT_EDITOR"))
