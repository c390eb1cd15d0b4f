"""Projection of accessories, groups and scenes onto entry trees."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .config import BridgeConfig
from .const import (
    BULB_ICON_BASES,
    DEFAULT_BULB_ICON,
    DEFAULT_GROUP_ID_WIDTH,
    DEVICE_PREFIX_FALLBACK,
    DEVICE_PREFIX_LIGHTBULB,
    DEVICE_PREFIX_REMOTE,
    GROUP_PREFIX,
    LIGHTBULB_CHANNEL,
    MODEL_ICONS,
    SCENE_PREFIX,
    VIRTUAL_GROUP_PREFIX,
)
from .definitions import RootKind, StateName, build_definition
from .entry import DisplaySchema, Entry, EntryKind, TechnicalSchema
from .models import Accessory, AccessoryType, Group, GroupKind, Scene, Spectrum

_LOGGER = logging.getLogger(__name__)

_SPECTRUM_ICON_SUFFIX = {
    Spectrum.NONE: "",
    Spectrum.WHITE: "_ws",
    Spectrum.RGB: "_rgb",
}
_SPECTRUM_CHANNEL_NAME = {
    Spectrum.NONE: "Lightbulb",
    Spectrum.WHITE: "Lightbulb (white spectrum)",
    Spectrum.RGB: "RGB Lightbulb",
}
_SPECTRUM_STATES = {
    Spectrum.NONE: (),
    Spectrum.WHITE: (StateName.COLOR_TEMPERATURE,),
    Spectrum.RGB: (StateName.COLOR, StateName.HUE, StateName.SATURATION),
}
_LIGHT_STATES = (StateName.BRIGHTNESS, StateName.ON_OFF, StateName.TRANSITION_DURATION)
_GROUP_STATES = (
    StateName.ON_OFF,
    StateName.BRIGHTNESS,
    StateName.TRANSITION_DURATION,
    StateName.COLOR_TEMPERATURE,
    StateName.COLOR,
    StateName.HUE,
    StateName.SATURATION,
)


@dataclass(frozen=True, slots=True)
class ProjectedRoot:
    """Display and technical sections of a root entry."""

    display: DisplaySchema
    technical: TechnicalSchema


# ids


def device_name(accessory: Accessory) -> str:
    """Return the namespace-less id of ``accessory``."""

    if accessory.type is AccessoryType.REMOTE:
        prefix = DEVICE_PREFIX_REMOTE
    elif accessory.type is AccessoryType.LIGHTBULB:
        prefix = DEVICE_PREFIX_LIGHTBULB
    else:
        _LOGGER.warning(
            "Unknown accessory type %s for device %s, using fallback prefix",
            accessory.type_name,
            accessory.instance_id,
        )
        prefix = DEVICE_PREFIX_FALLBACK
    return f"{prefix}-{accessory.instance_id}"


def device_id(accessory: Accessory, namespace: str) -> str:
    return f"{namespace}.{device_name(accessory)}"


def group_name(group: Group, width: int = DEFAULT_GROUP_ID_WIDTH) -> str:
    """Return the namespace-less id of ``group``."""

    match group.kind:
        case GroupKind.VIRTUAL:
            prefix = VIRTUAL_GROUP_PREFIX
        case _:
            prefix = GROUP_PREFIX
    return f"{prefix}-{str(group.instance_id).zfill(width)}"


def group_id(group: Group, namespace: str, width: int = DEFAULT_GROUP_ID_WIDTH) -> str:
    return f"{namespace}.{group_name(group, width)}"


def scene_name(scene: Scene) -> str:
    return f"{SCENE_PREFIX}-{scene.instance_id}"


def scene_id(scene: Scene, namespace: str) -> str:
    return f"{namespace}.{scene_name(scene)}"


def _root_pattern(namespace: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(namespace)}\.(\w+)-(\d+)")


def root_id_of(entry_id: str, namespace: str) -> str | None:
    """Return the root entry id that ``entry_id`` belongs to."""

    match = _root_pattern(namespace).match(entry_id)
    return match.group(0) if match else None


def instance_id_of(entry_id: str, namespace: str) -> int | None:
    """Return the gateway instance id encoded in ``entry_id``."""

    match = _root_pattern(namespace).match(entry_id)
    return int(match.group(2)) if match else None


def prefix_of(entry_id: str, namespace: str) -> str | None:
    """Return the root prefix (``L``, ``RC``, ``G``, ...) of ``entry_id``."""

    match = _root_pattern(namespace).match(entry_id)
    return match.group(1) if match else None


# icons


def resolve_icon(accessory: Accessory) -> str | None:
    """Return the icon file name for ``accessory``.

    Exact model matches win over the lightbulb rule. Lightbulbs get the base
    name of the first token contained in the model number plus a spectrum
    suffix.
    """

    model = accessory.device_info.model_number
    for model_name, icon in MODEL_ICONS:
        if model == model_name:
            return icon
    if not accessory.is_lightbulb:
        return None
    base = next(
        (name for token, name in BULB_ICON_BASES if token in model),
        DEFAULT_BULB_ICON,
    )
    return f"{base}{_SPECTRUM_ICON_SUFFIX[accessory.spectrum]}.png"


# root sections


def accessory_to_display(accessory: Accessory, config: BridgeConfig) -> DisplaySchema:
    icon = resolve_icon(accessory)
    return DisplaySchema(
        name=accessory.name,
        icon=f"{config.icon_path}{icon}" if icon is not None else None,
    )


def accessory_to_technical(accessory: Accessory) -> TechnicalSchema:
    info = accessory.device_info
    return TechnicalSchema(
        instanceId=accessory.instance_id,
        manufacturer=info.manufacturer,
        firmwareVersion=info.firmware_version,
        modelNumber=info.model_number,
        type=accessory.type_name,
        serialNumber=info.serial_number,
    )


def project_device(accessory: Accessory, config: BridgeConfig) -> ProjectedRoot:
    """Return the root sections for ``accessory``."""

    return ProjectedRoot(
        display=accessory_to_display(accessory, config),
        technical=accessory_to_technical(accessory),
    )


def group_to_display(group: Group) -> DisplaySchema:
    match group.kind:
        case GroupKind.VIRTUAL:
            name = group.display_name
        case _:
            name = group.name
    return DisplaySchema(name=name)


def group_to_technical(group: Group) -> TechnicalSchema:
    return TechnicalSchema(
        instanceId=group.instance_id,
        deviceIDs=list(group.device_ids),
        type=GroupKind(group.kind).value,
    )


def project_group(group: Group) -> ProjectedRoot:
    """Return the root sections for ``group``."""

    return ProjectedRoot(
        display=group_to_display(group),
        technical=group_to_technical(group),
    )


def group_root_kind(group: Group) -> RootKind:
    match group.kind:
        case GroupKind.VIRTUAL:
            return RootKind.VIRTUAL_GROUP
        case _:
            return RootKind.GROUP


def build_root_entry(root_id: str, kind: EntryKind, projected: ProjectedRoot) -> Entry:
    return Entry(
        id=root_id,
        kind=kind,
        display=projected.display,
        technical=projected.technical,
    )


# descendants


def light_states(root_id: str, spectrum: Spectrum) -> list[Entry]:
    """Return the state entries of a lightbulb channel for ``spectrum``."""

    names = (*_SPECTRUM_STATES[spectrum], *_LIGHT_STATES)
    return [build_definition(name, root_id, RootKind.DEVICE) for name in names]


def device_descendants(root_id: str, accessory: Accessory) -> list[Entry]:
    """Return every entry created below the root entry of ``accessory``."""

    entries = [
        build_definition(StateName.ALIVE, root_id, RootKind.DEVICE),
        build_definition(StateName.LAST_SEEN, root_id, RootKind.DEVICE),
    ]
    if accessory.is_lightbulb:
        spectrum = accessory.spectrum
        entries.append(
            Entry(
                id=f"{root_id}.{LIGHTBULB_CHANNEL}",
                kind=EntryKind.CHANNEL,
                display=DisplaySchema(name=_SPECTRUM_CHANNEL_NAME[spectrum], role="light"),
                technical=TechnicalSchema(spectrum=spectrum.value),
            )
        )
        entries.extend(light_states(root_id, spectrum))
    return entries


def group_descendants(root_id: str, group: Group) -> list[Entry]:
    """Return every entry created below the root entry of ``group``."""

    root_kind = group_root_kind(group)
    names: tuple[StateName, ...] = _GROUP_STATES
    if root_kind is RootKind.GROUP:
        names = (StateName.ACTIVE_SCENE, *names)
    return [build_definition(name, root_id, root_kind) for name in names]
