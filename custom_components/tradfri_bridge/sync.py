"""Reconcile the external entry tree with the gateway's read models.

A sync pass for one root (device or group) works in three steps:

1. When the root entry is missing, the root and every capability dependent
   descendant are created in one batch, seeded with values resolved from
   their path bindings.
2. Otherwise the display and technical sections are diffed against a fresh
   projection and only the changed fields are sent, in a single update.
3. Every stored descendant with a real path binding is refreshed from the
   read model. A binding that does not resolve for this object is skipped.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .config import BridgeConfig
from .const import ACTIVE_SCENE
from .entry import Entry, EntryKind, dump_section
from .exceptions import EntryCreationError, PathNotFound
from .models import Accessory, Group, GroupInfo
from .path import resolve
from .projector import (
    ProjectedRoot,
    build_root_entry,
    device_descendants,
    device_id,
    group_descendants,
    group_id,
    project_device,
    project_group,
)
from .session import BridgeSession
from .store import EntryStore

_LOGGER = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """What a single sync pass did to the store."""

    root_id: str
    created: list[str] = field(default_factory=list)
    root_updated: bool = False
    refreshed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def diff_sections(stored: Entry, projected: ProjectedRoot) -> dict[str, dict[str, Any]]:
    """Return the fields of ``projected`` that differ from ``stored``.

    Sections that compare equal are left out; fields only present in the
    stored entry are never removed.
    """

    patch: dict[str, dict[str, Any]] = {}
    for name, current, fresh in (
        ("display", stored.display, projected.display),
        ("technical", stored.technical, projected.technical),
    ):
        current_fields = dump_section(current)
        fresh_fields = dump_section(fresh)
        if current_fields == fresh_fields:
            continue
        changed = {
            key: value
            for key, value in fresh_fields.items()
            if key not in current_fields or current_fields[key] != value
        }
        if changed:
            patch[name] = changed
    return patch


class EntrySyncEngine:
    """Keep root entries and their state entries in line with the gateway."""

    def __init__(
        self,
        store: EntryStore,
        config: BridgeConfig,
        session: BridgeSession | None = None,
    ) -> None:
        self._store = store
        self._config = config
        self.session = session if session is not None else BridgeSession()
        # a lock lives as long as a call for its root holds or awaits it
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, root_id: str) -> asyncio.Lock:
        lock = self._locks.get(root_id)
        if lock is None:
            lock = self._locks[root_id] = asyncio.Lock()
        return lock

    async def async_sync_device(self, accessory: Accessory) -> SyncReport:
        """Create or update the entry tree of ``accessory``."""

        self.session.track_device(accessory)
        root_id = device_id(accessory, self._config.namespace)
        async with self._lock_for(root_id):
            return await self._async_sync_root(
                root_id,
                EntryKind.DEVICE,
                project_device(accessory, self._config),
                lambda: device_descendants(root_id, accessory),
                accessory.tree(),
            )

    async def async_sync_group(self, group: Group) -> SyncReport:
        """Create or update the entry tree of a real or virtual group."""

        self.session.track_group(group)
        root_id = group_id(group, self._config.namespace, self._config.group_id_width)
        async with self._lock_for(root_id):
            return await self._async_sync_root(
                root_id,
                EntryKind.GROUP,
                project_group(group),
                lambda: group_descendants(root_id, group),
                group.tree(),
            )

    async def async_sync_scenes(self, group_info: GroupInfo) -> bool:
        """Refresh the scene choices of a tracked group.

        Returns True when the scene selector was updated.
        """

        group = group_info.group
        if group.instance_id not in self.session.groups:
            return False
        root_id = group_id(group, self._config.namespace, self._config.group_id_width)
        scenes_id = f"{root_id}.{ACTIVE_SCENE}"
        async with self._lock_for(root_id):
            if await self._store.async_get_entry(scenes_id) is None:
                return False
            choices = {
                str(instance_id): scene.name
                for instance_id, scene in group_info.scenes.items()
            }
            _LOGGER.debug(
                "Updating possible scenes for group %s: %s",
                group.instance_id,
                list(choices),
            )
            await self._store.async_extend_entry(scenes_id, {"display": {"choices": choices}})
        return True

    async def _async_sync_root(
        self,
        root_id: str,
        kind: EntryKind,
        projected: ProjectedRoot,
        descendants: Callable[[], list[Entry]],
        tree: dict[str, Any],
    ) -> SyncReport:
        report = SyncReport(root_id=root_id)
        stored = await self._store.async_get_entry(root_id)
        if stored is None:
            root = build_root_entry(root_id, kind, projected)
            await self._async_create_tree(report, root, descendants(), tree)
            return report

        patch = diff_sections(stored, projected)
        if patch:
            _LOGGER.debug("Updating %s: %s", root_id, patch)
            await self._store.async_extend_entry(root_id, patch)
            report.root_updated = True

        await self._async_refresh_values(report, tree)
        return report

    async def _async_refresh_values(self, report: SyncReport, tree: dict[str, Any]) -> None:
        for entry in await self._store.async_list_descendants(report.root_id):
            path = entry.binding
            if path is None:
                continue
            try:
                value = resolve(tree, path)
            except PathNotFound as err:
                _LOGGER.debug("Skipping %s: %s", entry.id, err)
                report.skipped.append(entry.id)
                continue
            await self._store.async_set_value(entry.id, value, ack=True)
            report.refreshed.append(entry.id)

    async def _async_create_tree(
        self,
        report: SyncReport,
        root: Entry,
        descendants: list[Entry],
        tree: dict[str, Any],
    ) -> None:
        batch: list[tuple[Entry, Any]] = [(root, None)]
        for entry in descendants:
            path = entry.binding
            batch.append((entry, resolve(tree, path) if path is not None else None))

        results = await asyncio.gather(
            *(self._store.async_create_entry(entry, value) for entry, value in batch),
            return_exceptions=True,
        )
        failures: list[tuple[str, BaseException]] = []
        for (entry, _value), result in zip(batch, results):
            if isinstance(result, BaseException):
                failures.append((entry.id, result))
            else:
                report.created.append(entry.id)
        if failures:
            _LOGGER.error(
                "Failed to create %d of %d entries for %s",
                len(failures),
                len(batch),
                root.id,
            )
            raise EntryCreationError(root.id, failures)
