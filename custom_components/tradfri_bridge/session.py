"""Local index of the accessories and groups the bridge tracks."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import Accessory, Group, GroupKind, RealGroup, VirtualGroup


@dataclass
class BridgeSession:
    """Latest known read models, keyed by gateway instance id."""

    devices: dict[int, Accessory] = field(default_factory=dict)
    groups: dict[int, RealGroup] = field(default_factory=dict)
    virtual_groups: dict[int, VirtualGroup] = field(default_factory=dict)

    def track_device(self, accessory: Accessory) -> None:
        self.devices[accessory.instance_id] = accessory

    def track_group(self, group: Group) -> None:
        match group.kind:
            case GroupKind.VIRTUAL:
                self.virtual_groups[group.instance_id] = group
            case _:
                self.groups[group.instance_id] = group

    def lightbulbs_of(self, group: Group) -> list[Accessory]:
        """Return the tracked lightbulbs that are members of ``group``."""

        members = (self.devices.get(device_id) for device_id in group.device_ids)
        return [device for device in members if device is not None and device.is_lightbulb]
