"""Entry store persisted through Home Assistant's storage helper."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .const import DOMAIN
from .entry import Entry, dump_entry, load_entry
from .exceptions import UnknownEntryError
from .store import EntryPatch, EntryStore, merge_entry

if TYPE_CHECKING:  # pragma: no cover - typing only
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

STORAGE_VERSION = 1


class HassEntryStore(EntryStore):
    """Keep the entry tree in a ``.storage`` file.

    ``store`` is anything exposing ``async_load`` and ``async_save`` the way
    ``homeassistant.helpers.storage.Store`` does.
    """

    def __init__(self, store: Any) -> None:
        self._store = store
        self._entries: dict[str, dict[str, Any]] = {}
        self._values: dict[str, dict[str, Any]] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    @classmethod
    def from_hass(cls, hass: HomeAssistant, namespace: str) -> HassEntryStore:
        """Create a store keyed by ``namespace`` under the integration domain."""

        from homeassistant.helpers.storage import Store

        return cls(Store(hass, STORAGE_VERSION, f"{DOMAIN}.{namespace}"))

    async def _async_ensure_loaded(self) -> None:
        if self._loaded:
            return
        data = await self._store.async_load() or {}
        self._entries = dict(data.get("entries", {}))
        self._values = dict(data.get("values", {}))
        self._loaded = True
        _LOGGER.debug("Loaded %d stored entries", len(self._entries))

    async def _async_save(self) -> None:
        await self._store.async_save({"entries": self._entries, "values": self._values})

    async def async_get_entry(self, entry_id: str) -> Entry | None:
        async with self._lock:
            await self._async_ensure_loaded()
            payload = self._entries.get(entry_id)
        return load_entry(payload) if payload is not None else None

    async def async_list_descendants(self, root_id: str) -> list[Entry]:
        prefix = f"{root_id}."
        async with self._lock:
            await self._async_ensure_loaded()
            payloads = [
                payload for key, payload in self._entries.items() if key.startswith(prefix)
            ]
        return [load_entry(payload) for payload in payloads]

    async def async_create_entry(self, entry: Entry, initial_value: Any = None) -> None:
        async with self._lock:
            await self._async_ensure_loaded()
            self._entries[entry.id] = dump_entry(entry)
            self._values[entry.id] = {"value": initial_value, "ack": True}
            await self._async_save()

    async def async_extend_entry(self, entry_id: str, patch: EntryPatch) -> None:
        async with self._lock:
            await self._async_ensure_loaded()
            payload = self._entries.get(entry_id)
            if payload is None:
                raise UnknownEntryError(entry_id)
            self._entries[entry_id] = dump_entry(merge_entry(load_entry(payload), patch))
            await self._async_save()

    async def async_set_value(self, entry_id: str, value: Any, ack: bool) -> None:
        async with self._lock:
            await self._async_ensure_loaded()
            if entry_id not in self._entries:
                raise UnknownEntryError(entry_id)
            self._values[entry_id] = {"value": value, "ack": ack}
            await self._async_save()

    async def async_get_value(self, entry_id: str) -> Any:
        """Return the stored value of ``entry_id`` (None when unset)."""

        async with self._lock:
            await self._async_ensure_loaded()
            state = self._values.get(entry_id)
        return state["value"] if state is not None else None
