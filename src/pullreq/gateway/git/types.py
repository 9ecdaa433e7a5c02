"""Types for local repository operations.

PushResult | PushError follows the non-ideal-state pattern: failures are
returned, not raised.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Remote:
    """A configured git remote."""

    name: str
    url: str


@dataclass(frozen=True)
class BranchRef:
    """A local or remote-tracking branch.

    remote is None for local branches (refs/heads/...) and holds the remote name
    for remote-tracking branches (refs/remotes/<remote>/...).
    """

    short_name: str
    remote: str | None = None

    @property
    def is_remote(self) -> bool:
        return self.remote is not None

    @property
    def long_name(self) -> str:
        if self.remote is None:
            return f"refs/heads/{self.short_name}"
        return f"refs/remotes/{self.remote}/{self.short_name}"


@dataclass(frozen=True)
class PushResult:
    """Success result from pushing to remote."""


@dataclass(frozen=True)
class PushError:
    """Error result from pushing to remote. Implements NonIdealState."""

    message: str

    @property
    def error_type(self) -> str:
        return "push-failed"
