"""Errors raised by the Tradfri bridge."""

from __future__ import annotations

from collections.abc import Sequence


class TradfriBridgeError(Exception):
    """Base class for bridge errors."""


class PathNotFound(TradfriBridgeError, LookupError):
    """Raised when a path cannot be traversed to its end."""

    def __init__(self, path: str, segment: str) -> None:
        """Record the path and the segment that could not be reached."""

        super().__init__(f"Cannot resolve {segment!r} of path {path!r}")
        self.path = path
        self.segment = segment


class UnknownEntryError(TradfriBridgeError, KeyError):
    """Raised when an entry id does not exist in the store."""


class EntryCreationError(TradfriBridgeError):
    """Raised after a creation batch when one or more entries failed."""

    def __init__(self, root_id: str, failures: Sequence[tuple[str, BaseException]]) -> None:
        """Collect every failed entry id with its cause."""

        ids = ", ".join(entry_id for entry_id, _ in failures)
        super().__init__(f"Failed to create {len(failures)} entries under {root_id}: {ids}")
        self.root_id = root_id
        self.failures = list(failures)
