"""Commands sent back to the gateway.

State entries written by a user (``ack`` is False) are translated into
operations on the accessory or group they belong to. Colour requests are
converted into the chromaticity the lamps understand.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .color import hex_to_device, hex_to_hue_saturation, hue_saturation_to_hex
from .config import BridgeConfig
from .const import (
    DEVICE_PREFIX_LIGHTBULB,
    GROUP_PREFIX,
    VIRTUAL_GROUP_PREFIX,
)
from .exceptions import UnknownEntryError
from .models import Accessory, Group, GroupKind, Light, RealGroup, Spectrum, VirtualGroup
from .path import parse_path, write
from .projector import instance_id_of, prefix_of
from .session import BridgeSession
from .store import EntryStore

_LOGGER = logging.getLogger(__name__)

Operation = dict[str, Any]

_COLOR_FIELDS = frozenset({"color", "hue", "saturation"})


class GatewayClient(ABC):
    """Port for the gateway connection that executes commands."""

    @abstractmethod
    async def async_operate_light(self, accessory: Accessory, operation: Operation) -> bool:
        """Apply ``operation`` to the first light of ``accessory``."""

    @abstractmethod
    async def async_operate_group(self, group: RealGroup, operation: Operation) -> bool:
        """Apply ``operation`` to a gateway group."""

    @abstractmethod
    async def async_update_device(self, accessory: Accessory) -> bool:
        """Persist changed accessory metadata (e.g. its name)."""

    @abstractmethod
    async def async_update_group(self, group: RealGroup) -> bool:
        """Persist changed group metadata (e.g. its name)."""


def build_light_operation(light: Light, changes: Mapping[str, Any]) -> Operation:
    """Translate requested field changes into a light operation.

    On RGB lights ``color``, ``hue`` and ``saturation`` are merged with the
    current colour and sent as ``colorX``/``colorY``.
    """

    operation: Operation = {
        key: value for key, value in changes.items() if key not in _COLOR_FIELDS
    }
    requested = _COLOR_FIELDS.intersection(changes)
    if not requested:
        return operation
    if light.spectrum is not Spectrum.RGB:
        _LOGGER.debug("Ignoring colour change %s for a %s light", requested, light.spectrum.value)
        return operation

    if "color" in changes:
        hex_color = str(changes["color"])
    else:
        current_hue, current_saturation = (
            hex_to_hue_saturation(light.color) if light.color else (0, 100)
        )
        hex_color = hue_saturation_to_hex(
            changes.get("hue", current_hue),
            changes.get("saturation", current_saturation),
        )
    device_color = hex_to_device(hex_color)
    operation["colorX"] = device_color.color_x
    operation["colorY"] = device_color.color_y
    return operation


def merge_into_group(group: VirtualGroup, operation: Operation) -> VirtualGroup:
    """Return ``group`` with the fields of ``operation`` written into it."""

    tree = group.tree()
    for path, value in operation.items():
        write(tree, path, value)
    return VirtualGroup.model_validate(tree)


async def async_operate_virtual_group(
    session: BridgeSession,
    gateway: GatewayClient,
    group: Group,
    operation: Operation,
) -> None:
    """Send ``operation`` to every lightbulb of ``group``.

    Used for virtual groups and for fields a real group does not have.
    Virtual groups also remember the new values.
    """

    for accessory in session.lightbulbs_of(group):
        light_operation = (
            build_light_operation(accessory.light_list[0], operation)
            if accessory.light_list
            else dict(operation)
        )
        await gateway.async_operate_light(accessory, light_operation)
    match group.kind:
        case GroupKind.VIRTUAL:
            session.track_group(merge_into_group(group, operation))
        case _:
            pass


async def async_rename_device(gateway: GatewayClient, accessory: Accessory, name: str) -> bool:
    return await gateway.async_update_device(accessory.model_copy(update={"name": name}))


async def async_rename_group(gateway: GatewayClient, group: RealGroup, name: str) -> bool:
    return await gateway.async_update_group(group.model_copy(update={"name": name}))


class StateCommandHandler:
    """Dispatch user changes of state entries to the gateway."""

    def __init__(
        self,
        store: EntryStore,
        session: BridgeSession,
        gateway: GatewayClient,
        config: BridgeConfig,
    ) -> None:
        self._store = store
        self._session = session
        self._gateway = gateway
        self._config = config

    async def async_handle_state_change(self, entry_id: str, value: Any, ack: bool) -> bool:
        """Send the command for a changed state; returns True when one was sent."""

        if ack:
            return False
        entry = await self._store.async_get_entry(entry_id)
        if entry is None:
            raise UnknownEntryError(entry_id)
        path = entry.binding
        # unbound colour states of real groups carry their field in the id
        field_name = str(parse_path(path)[-1]) if path is not None else entry_id.rsplit(".", 1)[-1]

        namespace = self._config.namespace
        prefix = prefix_of(entry_id, namespace)
        instance_id = instance_id_of(entry_id, namespace)
        if prefix is None or instance_id is None:
            raise UnknownEntryError(entry_id)

        operation = {field_name: value}
        if prefix == DEVICE_PREFIX_LIGHTBULB:
            return await self._async_operate_device(instance_id, operation)
        if prefix == GROUP_PREFIX:
            return await self._async_operate_group(
                instance_id, operation, virtual_field=path is None
            )
        if prefix == VIRTUAL_GROUP_PREFIX:
            group = self._session.virtual_groups.get(instance_id)
            if group is None:
                return False
            await async_operate_virtual_group(self._session, self._gateway, group, operation)
            return True
        _LOGGER.debug("No command mapping for %s", entry_id)
        return False

    async def _async_operate_device(self, instance_id: int, operation: Operation) -> bool:
        accessory = self._session.devices.get(instance_id)
        if accessory is None or not accessory.light_list:
            return False
        light_operation = build_light_operation(accessory.light_list[0], operation)
        return await self._gateway.async_operate_light(accessory, light_operation)

    async def _async_operate_group(
        self, instance_id: int, operation: Operation, *, virtual_field: bool
    ) -> bool:
        group = self._session.groups.get(instance_id)
        if group is None:
            return False
        if virtual_field:
            await async_operate_virtual_group(self._session, self._gateway, group, operation)
            return True
        return await self._gateway.async_operate_group(group, operation)
