"""Constants for the Tradfri bridge."""

from __future__ import annotations

from typing import Final

DOMAIN: Final = "tradfri_bridge"

DEFAULT_ICON_PATH: Final = "icons/"
DEFAULT_GROUP_ID_WIDTH: Final = 5

# Path binding for states that have no backing field on the domain object.
VIRTUAL_PATH: Final = "__virtual__"

DEVICE_PREFIX_REMOTE: Final = "RC"
DEVICE_PREFIX_LIGHTBULB: Final = "L"
DEVICE_PREFIX_FALLBACK: Final = "XYZ"
GROUP_PREFIX: Final = "G"
VIRTUAL_GROUP_PREFIX: Final = "VG"
SCENE_PREFIX: Final = "S"

LIGHTBULB_CHANNEL: Final = "lightbulb"
ACTIVE_SCENE: Final = "activeScene"

MODEL_ICONS: Final = (
    ("TRADFRI remote control", "remote.png"),
    ("TRADFRI motion sensor", "motion_sensor.png"),
    ("TRADFRI wireless dimmer", "remote_dimmer.png"),
    ("TRADFRI plug", "plug.png"),
)
BULB_ICON_BASES: Final = (
    ("panel", "panel"),
    ("door", "door"),
    ("GU10", "gu10"),
)
DEFAULT_BULB_ICON: Final = "bulb"
