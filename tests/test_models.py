"""Tests for the gateway read models."""

from __future__ import annotations

from pydantic import TypeAdapter

from custom_components.tradfri_bridge.color import (
    device_to_hex,
    hex_to_device,
    hex_to_hue_saturation,
)
from custom_components.tradfri_bridge.models import (
    Accessory,
    AccessoryType,
    Group,
    GroupInfo,
    Light,
    RealGroup,
    Spectrum,
    VirtualGroup,
)


def test_accessory_parses_camel_case_payload():
    """Gateway payloads use camelCase keys."""

    accessory = Accessory.model_validate(
        {
            "instanceId": 65537,
            "name": "Desk lamp",
            "type": "lightbulb",
            "deviceInfo": {
                "manufacturer": "IKEA of Sweden",
                "firmwareVersion": "2.3.086",
                "modelNumber": "TRADFRI bulb E27 WS opal 980lm",
                "serialNumber": "",
            },
            "lightList": [{"spectrum": "white", "onOff": True, "dimmer": 50}],
            "alive": True,
            "lastSeen": 1700000000,
        }
    )

    assert accessory.type is AccessoryType.LIGHTBULB
    assert accessory.is_lightbulb
    assert accessory.spectrum is Spectrum.WHITE
    assert accessory.device_info.firmware_version == "2.3.086"
    assert accessory.light_list[0].dimmer == 50


def test_unknown_accessory_type_is_kept_as_string():
    """Unrecognised type tags survive validation."""

    accessory = Accessory(instance_id=1, type="blind")

    assert accessory.type == "blind"
    assert accessory.type_name == "blind"
    assert not accessory.is_lightbulb
    assert accessory.spectrum is Spectrum.NONE


def test_tree_uses_wire_names():
    """The plain tree is keyed by the camelCase field names."""

    accessory = Accessory(
        instance_id=3,
        type=AccessoryType.LIGHTBULB,
        light_list=[Light(spectrum=Spectrum.WHITE, color_temperature=30)],
    )

    tree = accessory.tree()

    assert tree["instanceId"] == 3
    assert tree["type"] == "lightbulb"
    assert tree["lightList"][0]["colorTemperature"] == 30
    assert tree["lightList"][0]["spectrum"] == "white"
    assert tree["deviceInfo"]["firmwareVersion"] == ""


def test_rgb_light_derives_color_from_chromaticity():
    """RGB lights expose hex colour, hue and saturation."""

    device = hex_to_device("ff0000")
    light = Light.model_validate(
        {"spectrum": "rgb", "colorX": device.color_x, "colorY": device.color_y}
    )

    assert light.color == device_to_hex(device.color_x, device.color_y)
    assert (light.hue, light.saturation) == hex_to_hue_saturation(light.color)


def test_explicit_color_values_are_not_overwritten():
    """Reported hue and saturation win over derived ones."""

    light = Light(spectrum=Spectrum.RGB, color="00ff00", hue=10, saturation=20)

    assert light.color == "00ff00"
    assert light.hue == 10
    assert light.saturation == 20


def test_white_light_has_no_derived_color():
    """Only RGB lights get colour fields derived."""

    light = Light(spectrum=Spectrum.WHITE, color_x=30000, color_y=30000)

    assert light.color is None
    assert light.hue is None


def test_group_union_dispatches_on_kind():
    """The kind tag selects the group variant."""

    adapter = TypeAdapter(Group)

    real = adapter.validate_python({"kind": "group", "instanceId": 131073, "sceneId": 7})
    virtual = adapter.validate_python({"kind": "virtual group", "instanceId": 2})

    assert isinstance(real, RealGroup)
    assert real.scene_id == 7
    assert isinstance(virtual, VirtualGroup)
    assert virtual.display_name == "virtual group 2"


def test_group_device_ids_alias():
    """Member ids are read from ``deviceIDs``."""

    group = RealGroup.model_validate({"instanceId": 5, "deviceIDs": [65537, 65538]})

    assert group.device_ids == [65537, 65538]
    assert group.tree()["deviceIDs"] == [65537, 65538]
    assert group.tree()["kind"] == "group"


def test_group_info_keys_scenes_by_instance_id():
    """Scenes are keyed by their instance id."""

    info = GroupInfo.model_validate(
        {
            "group": {"instanceId": 5, "name": "Living room"},
            "scenes": {"196608": {"instanceId": 196608, "name": "Relax"}},
        }
    )

    assert info.scenes[196608].name == "Relax"
    assert info.group.name == "Living room"
