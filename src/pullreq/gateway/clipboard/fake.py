"""Fake Clipboard implementation for testing."""

from pullreq.gateway.clipboard.abc import Clipboard


class FakeClipboard(Clipboard):
    """In-memory clipboard.

    Constructor Injection:
    ---------------------
    - available: Whether copy() succeeds
    """

    def __init__(self, *, available: bool = True) -> None:
        self._available = available
        self._copied: list[str] = []

    def copy(self, text: str) -> bool:
        if not self._available:
            return False
        self._copied.append(text)
        return True

    @property
    def copied(self) -> list[str]:
        """Texts copied so far, for test assertions."""
        return list(self._copied)
