"""Read models for accessories, groups and scenes reported by the gateway."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .color import device_to_hex, hex_to_hue_saturation


class AccessoryType(str, Enum):
    """Device classes known to the gateway."""

    REMOTE = "remote"
    LIGHTBULB = "lightbulb"
    SENSOR = "sensor"
    PLUG = "plug"


class Spectrum(str, Enum):
    """Colour capability of a lightbulb."""

    NONE = "none"
    WHITE = "white"
    RGB = "rgb"


class GroupKind(str, Enum):
    """Discriminator for the group variants."""

    REAL = "group"
    VIRTUAL = "virtual group"


class _GatewayModel(BaseModel):
    """Shared configuration: snake_case attributes, camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def tree(self) -> dict[str, Any]:
        """Return the model as plain mappings, sequences and scalars."""

        return self.model_dump(by_alias=True, mode="json")


class DeviceInfo(_GatewayModel):
    manufacturer: str = ""
    firmware_version: str = ""
    model_number: str = ""
    serial_number: str = ""


class Light(_GatewayModel):
    """State of a single light endpoint."""

    spectrum: Spectrum = Spectrum.NONE
    on_off: bool | None = None
    dimmer: float | None = None
    color_temperature: float | None = None
    color: str | None = None
    hue: float | None = None
    saturation: float | None = None
    transition_time: float | None = None
    color_x: int | None = None
    color_y: int | None = None

    @model_validator(mode="after")
    def _derive_color(self) -> Light:
        """Fill hex colour, hue and saturation from device chromaticity."""

        if self.spectrum is not Spectrum.RGB:
            return self
        if self.color is None and self.color_x is not None and self.color_y is not None:
            self.color = device_to_hex(self.color_x, self.color_y)
        if self.color is not None and (self.hue is None or self.saturation is None):
            hue, saturation = hex_to_hue_saturation(self.color)
            if self.hue is None:
                self.hue = hue
            if self.saturation is None:
                self.saturation = saturation
        return self


class Accessory(_GatewayModel):
    """A single physical device paired with the gateway."""

    instance_id: int
    name: str = ""
    type: AccessoryType | str = Field(union_mode="left_to_right")
    device_info: DeviceInfo = Field(default_factory=DeviceInfo)
    light_list: list[Light] = Field(default_factory=list)
    alive: bool = False
    last_seen: int | None = None

    @property
    def type_name(self) -> str:
        """Return the type tag as a plain string."""

        return self.type.value if isinstance(self.type, AccessoryType) else str(self.type)

    @property
    def is_lightbulb(self) -> bool:
        return self.type is AccessoryType.LIGHTBULB

    @property
    def spectrum(self) -> Spectrum:
        """Return the colour capability of the first light, if any."""

        if not self.light_list:
            return Spectrum.NONE
        return self.light_list[0].spectrum


class _GroupBase(_GatewayModel):
    instance_id: int
    name: str = ""
    device_ids: list[int] = Field(default_factory=list, alias="deviceIDs")
    on_off: bool | None = None
    dimmer: float | None = None
    transition_time: float | None = None


class RealGroup(_GroupBase):
    """A group managed natively by the gateway."""

    kind: Literal["group"] = "group"
    scene_id: int | None = None


class VirtualGroup(_GroupBase):
    """A group synthesised locally; operations fan out to its members."""

    kind: Literal["virtual group"] = "virtual group"
    color_temperature: float | None = None
    color: str | None = None
    hue: float | None = None
    saturation: float | None = None

    @property
    def display_name(self) -> str:
        return self.name or f"virtual group {self.instance_id}"


Group = Annotated[RealGroup | VirtualGroup, Field(discriminator="kind")]


class Scene(_GatewayModel):
    instance_id: int
    name: str = ""


class GroupInfo(_GatewayModel):
    """A real group together with the scenes defined for it."""

    group: RealGroup
    scenes: dict[int, Scene] = Field(default_factory=dict)
