"""Real Clipboard implementation using pyperclip.

pyperclip handles xclip/xsel on Linux, pbcopy on macOS, etc.
"""

from pullreq.gateway.clipboard.abc import Clipboard


class RealClipboard(Clipboard):
    """Production implementation using pyperclip for clipboard access."""

    def copy(self, text: str) -> bool:
        # Inline import: only needed when --copy is used
        import pyperclip

        if not pyperclip.is_available():
            return False
        pyperclip.copy(text)
        return True
