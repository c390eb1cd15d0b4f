"""External state store port and an in-memory adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .entry import Entry, dump_entry, load_entry
from .exceptions import UnknownEntryError

EntryPatch = Mapping[str, Mapping[str, Any]]


@dataclass(slots=True)
class StateValue:
    """Current value of a state entry."""

    value: Any
    ack: bool


class EntryStore(ABC):
    """Port for the hierarchical key-value store the bridge keeps in sync.

    Every operation is idempotent per entry, so callers may retry freely.
    """

    @abstractmethod
    async def async_get_entry(self, entry_id: str) -> Entry | None:
        """Return the stored entry or None when it does not exist."""

    @abstractmethod
    async def async_list_descendants(self, root_id: str) -> list[Entry]:
        """Return every stored entry below ``root_id``."""

    @abstractmethod
    async def async_create_entry(self, entry: Entry, initial_value: Any = None) -> None:
        """Create ``entry`` (or overwrite it) and set its initial value."""

    @abstractmethod
    async def async_extend_entry(self, entry_id: str, patch: EntryPatch) -> None:
        """Shallow-merge ``patch`` into the ``display``/``technical`` sections."""

    @abstractmethod
    async def async_set_value(self, entry_id: str, value: Any, ack: bool) -> None:
        """Set the value of a state entry; ``ack`` marks adapter-originated values."""


def merge_entry(entry: Entry, patch: EntryPatch) -> Entry:
    """Return ``entry`` with each section of ``patch`` merged in."""

    payload = dump_entry(entry)
    for section, fields in patch.items():
        if section not in ("display", "technical"):
            raise ValueError(f"Unknown entry section {section!r}")
        payload[section].update(fields)
    return load_entry(payload)


class InMemoryEntryStore(EntryStore):
    """Dictionary backed store."""

    def __init__(self) -> None:
        self.entries: dict[str, Entry] = {}
        self.values: dict[str, StateValue] = {}

    async def async_get_entry(self, entry_id: str) -> Entry | None:
        return self.entries.get(entry_id)

    async def async_list_descendants(self, root_id: str) -> list[Entry]:
        prefix = f"{root_id}."
        return [entry for key, entry in self.entries.items() if key.startswith(prefix)]

    async def async_create_entry(self, entry: Entry, initial_value: Any = None) -> None:
        self.entries[entry.id] = entry
        self.values[entry.id] = StateValue(initial_value, True)

    async def async_extend_entry(self, entry_id: str, patch: EntryPatch) -> None:
        entry = self.entries.get(entry_id)
        if entry is None:
            raise UnknownEntryError(entry_id)
        self.entries[entry_id] = merge_entry(entry, patch)

    async def async_set_value(self, entry_id: str, value: Any, ack: bool) -> None:
        if entry_id not in self.entries:
            raise UnknownEntryError(entry_id)
        self.values[entry_id] = StateValue(value, ack)
