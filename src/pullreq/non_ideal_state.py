"""Protocol for non-ideal results returned instead of raised.

Operations that can fail in expected ways return a union of their success type
and one or more frozen dataclasses implementing NonIdealState. Callers narrow the
union with isinstance checks (see pullreq.cli.ensure_ideal.EnsureIdeal).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class NonIdealState(Protocol):
    """A result describing why an operation could not produce its ideal value."""

    @property
    def error_type(self) -> str: ...

    @property
    def message(self) -> str: ...
