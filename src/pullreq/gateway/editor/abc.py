"""Text editor abstraction for testability."""

from abc import ABC, abstractmethod
from pathlib import Path


class Editor(ABC):
    """Abstract interface for editing a file interactively."""

    @abstractmethod
    def edit_file(self, path: Path) -> None:
        """Open the file in the user's editor and block until it is closed.

        Args:
            path: File to edit in place

        Raises:
            click.ClickException: If the editor cannot be launched
        """
        ...
