"""Definitions for every state entry the bridge creates.

Each builder takes the id of the root entry and the kind of root object and
returns a complete entry: id, display schema and path binding. Builders are
pure, so calling one twice with the same arguments yields equal entries.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from types import MappingProxyType

from .const import ACTIVE_SCENE, LIGHTBULB_CHANNEL, VIRTUAL_PATH
from .entry import DisplaySchema, Entry, EntryKind, TechnicalSchema


class RootKind(str, Enum):
    """Kinds of domain object an entry tree can hang off."""

    DEVICE = "device"
    GROUP = "group"
    VIRTUAL_GROUP = "virtual group"


class StateName(str, Enum):
    """Semantic names of the states in the registry."""

    ON_OFF = "onOff"
    BRIGHTNESS = "brightness"
    TRANSITION_DURATION = "transitionDuration"
    COLOR_TEMPERATURE = "colorTemperature"
    COLOR = "color"
    HUE = "hue"
    SATURATION = "saturation"
    ACTIVE_SCENE = "activeScene"
    ALIVE = "alive"
    LAST_SEEN = "lastSeen"


ObjectDefinition = Callable[[str, RootKind], Entry]


def _light_state_id(root_id: str, root_kind: RootKind, suffix: str) -> str:
    if root_kind is RootKind.DEVICE:
        return f"{root_id}.{LIGHTBULB_CHANNEL}.{suffix}"
    return f"{root_id}.{suffix}"


def _light_path(root_kind: RootKind, field: str) -> str:
    if root_kind is RootKind.DEVICE:
        return f"lightList.[0].{field}"
    return field


def _color_path(root_kind: RootKind, field: str) -> str:
    """Colour fields only exist on lights and virtual groups."""

    if root_kind is RootKind.GROUP:
        return VIRTUAL_PATH
    return _light_path(root_kind, field)


def _describe(root_kind: RootKind, device: str, group: str) -> str:
    return device if root_kind is RootKind.DEVICE else group


def _state(entry_id: str, path: str, **display: object) -> Entry:
    return Entry(
        id=entry_id,
        kind=EntryKind.STATE,
        display=DisplaySchema(**display),
        technical=TechnicalSchema(path=path),
    )


def active_scene(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        f"{root_id}.{ACTIVE_SCENE}",
        "sceneId",
        name="active scene",
        read=True,
        write=True,
        value_type="number",
        role="value.id",
        description="the instance id of the currently active scene",
    )


def on_off(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "state"),
        _light_path(root_kind, "onOff"),
        name="on/off",
        read=True,
        write=True,
        value_type="boolean",
        role="switch",
    )


def brightness(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "brightness"),
        _light_path(root_kind, "dimmer"),
        name="Brightness",
        read=True,
        write=True,
        min=0,
        max=100,
        unit="%",
        value_type="number",
        role="light.dimmer",
        description=_describe(
            root_kind,
            "Brightness of the lightbulb",
            "Brightness of this group's lightbulbs",
        ),
    )


def transition_duration(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "transitionDuration"),
        _light_path(root_kind, "transitionTime"),
        name="Transition duration",
        read=False,
        write=True,
        value_type="number",
        min=0,
        max=100,
        default=0,
        role="light.dimmer",
        unit="s",
        description=_describe(
            root_kind,
            "Duration of a state change",
            "Duration for state changes of this group's lightbulbs",
        ),
    )


def color_temperature(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "colorTemperature"),
        _color_path(root_kind, "colorTemperature"),
        name="Color temperature",
        read=True,
        write=True,
        min=0,
        max=100,
        unit="%",
        value_type="number",
        role="level.color.temperature",
        description=_describe(
            root_kind,
            "Range: 0% = cold, 100% = warm",
            "Color temperature of this group's white spectrum lightbulbs. "
            "Range: 0% = cold, 100% = warm",
        ),
    )


def color(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "color"),
        _color_path(root_kind, "color"),
        name="RGB color",
        read=True,
        write=True,
        value_type="string",
        role="level.color",
        description=_describe(
            root_kind,
            "6-digit RGB hex string",
            "Color of this group's RGB lightbulbs as a 6-digit hex string.",
        ),
    )


def hue(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "hue"),
        _color_path(root_kind, "hue"),
        name="Hue",
        read=True,
        write=True,
        min=0,
        max=360,
        unit="°",
        value_type="number",
        role="level.color.hue",
        description=_describe(
            root_kind,
            "Hue of this RGB lightbulb",
            "Hue of this group's RGB lightbulbs",
        ),
    )


def saturation(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        _light_state_id(root_id, root_kind, "saturation"),
        _color_path(root_kind, "saturation"),
        name="Saturation",
        read=True,
        write=True,
        min=0,
        max=100,
        unit="%",
        value_type="number",
        role="level.color.saturation",
        description=_describe(
            root_kind,
            "Saturation of this RGB lightbulb",
            "Saturation of this group's RGB lightbulbs",
        ),
    )


def alive(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        f"{root_id}.alive",
        "alive",
        name="device alive",
        read=True,
        write=False,
        value_type="boolean",
        role="indicator.alive",
        description="indicates if the device is currently alive and connected to the gateway",
    )


def last_seen(root_id: str, root_kind: RootKind) -> Entry:
    return _state(
        f"{root_id}.lastSeen",
        "lastSeen",
        name="last seen timestamp",
        read=True,
        write=False,
        value_type="number",
        role="indicator.lastSeen",
        description="indicates when the device has last been seen by the gateway",
    )


OBJECT_DEFINITIONS: MappingProxyType[StateName, ObjectDefinition] = MappingProxyType(
    {
        StateName.ACTIVE_SCENE: active_scene,
        StateName.ON_OFF: on_off,
        StateName.BRIGHTNESS: brightness,
        StateName.TRANSITION_DURATION: transition_duration,
        StateName.COLOR_TEMPERATURE: color_temperature,
        StateName.COLOR: color,
        StateName.HUE: hue,
        StateName.SATURATION: saturation,
        StateName.ALIVE: alive,
        StateName.LAST_SEEN: last_seen,
    }
)


def build_definition(name: StateName, root_id: str, root_kind: RootKind) -> Entry:
    """Build the entry for ``name`` under ``root_id``."""

    return OBJECT_DEFINITIONS[name](root_id, root_kind)
