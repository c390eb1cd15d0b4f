"""Configuration handling for the Tradfri bridge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import DEFAULT_GROUP_ID_WIDTH, DEFAULT_ICON_PATH

CONF_NAMESPACE = "namespace"
CONF_ICON_PATH = "icon_path"
CONF_GROUP_ID_WIDTH = "group_id_width"

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAMESPACE): vol.All(
            str, vol.Match(r"^[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)*$")
        ),
        vol.Optional(CONF_ICON_PATH, default=DEFAULT_ICON_PATH): str,
        vol.Optional(CONF_GROUP_ID_WIDTH, default=DEFAULT_GROUP_ID_WIDTH): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
    }
)


@dataclass(frozen=True, slots=True)
class BridgeConfig:
    """Validated bridge options."""

    namespace: str
    icon_path: str = DEFAULT_ICON_PATH
    group_id_width: int = DEFAULT_GROUP_ID_WIDTH

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> BridgeConfig:
        """Validate ``options`` and build a config, raising ``vol.Invalid``."""

        validated = CONFIG_SCHEMA(dict(options))
        return cls(
            namespace=validated[CONF_NAMESPACE],
            icon_path=validated[CONF_ICON_PATH],
            group_id_width=validated[CONF_GROUP_ID_WIDTH],
        )
