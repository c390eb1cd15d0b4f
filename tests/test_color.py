"""Tests for the colour conversions."""

from __future__ import annotations

import pytest

from custom_components.tradfri_bridge.color import (
    DEVICE_COLOR_MAX,
    RGB,
    RGB_GAMUT,
    Point,
    XYColor,
    closest_point_in_gamut,
    device_to_hex,
    from_device_units,
    hex_to_device,
    hex_to_hue_saturation,
    hue_saturation_to_hex,
    point_in_triangle,
    rgb_from_string,
    rgb_to_string,
    rgb_to_xy,
    to_device_units,
)


def test_rgb_string_parsing_accepts_optional_hash():
    """Hex strings parse with or without the leading hash."""

    assert rgb_from_string("#FF8000") == RGB(255, 128, 0)
    assert rgb_from_string("0a0b0c") == RGB(10, 11, 12)


@pytest.mark.parametrize("value", ["", "fff", "gg0000", "#1234567"])
def test_rgb_string_parsing_rejects_malformed_values(value):
    """Anything but six hex digits is rejected."""

    with pytest.raises(ValueError):
        rgb_from_string(value)


def test_rgb_to_string_is_lowercase_and_clamped():
    """Formatting clamps channels to a byte."""

    assert rgb_to_string(RGB(255, 0, 16)) == "ff0010"
    assert rgb_to_string((300, -5, 171)) == "ff00ab"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("ff0000", (0, 100)), ("00ff00", (120, 100)), ("0000ff", (240, 100)), ("ffffff", (0, 0))],
)
def test_hex_to_hue_saturation(value, expected):
    """Hue is reported in degrees and saturation in percent."""

    assert hex_to_hue_saturation(value) == expected


def test_hue_saturation_to_hex():
    """Full brightness is assumed unless given."""

    assert hue_saturation_to_hex(240, 100) == "0000ff"
    assert hue_saturation_to_hex(0, 0) == "ffffff"
    assert hue_saturation_to_hex(360, 100) == "ff0000"
    assert hue_saturation_to_hex(0, 100, brightness=0) == "000000"


def test_gamut_membership_and_clamping():
    """Points outside the triangle move to the closest edge point."""

    assert point_in_triangle(RGB_GAMUT, Point(0.3, 0.3))
    assert not point_in_triangle(RGB_GAMUT, Point(0.0, 0.0))

    inside = Point(0.3, 0.3)
    assert closest_point_in_gamut(RGB_GAMUT, inside) == inside
    clamped = closest_point_in_gamut(RGB_GAMUT, Point(0.8, 0.2))
    assert clamped.x == pytest.approx(RGB_GAMUT.red.x)
    assert clamped.y == pytest.approx(RGB_GAMUT.red.y)


def test_rgb_to_xy_for_black_and_white():
    """Black has no chromaticity; white sits near the white point."""

    assert rgb_to_xy((0, 0, 0)) == XYColor(0.0, 0.0, 0.0)

    white = rgb_to_xy((255, 255, 255))
    assert white.x == pytest.approx(0.3227, abs=1e-3)
    assert white.y == pytest.approx(0.3290, abs=1e-3)
    assert white.luminance == pytest.approx(1.0, abs=1e-3)


def test_device_units_scale_to_protocol_range():
    """The xy plane maps onto 0..65279."""

    assert to_device_units(1.0, 0.5) == (DEVICE_COLOR_MAX, round(DEVICE_COLOR_MAX / 2))
    assert from_device_units(DEVICE_COLOR_MAX, 0) == Point(1.0, 0.0)


def test_hex_to_device_for_red_lands_on_red_primary():
    """Saturated red is reported at the red corner of the gamut."""

    device = hex_to_device("ff0000")

    assert device.color_x == pytest.approx(0.7006 * DEVICE_COLOR_MAX, abs=100)
    assert device.color_y == pytest.approx(0.2993 * DEVICE_COLOR_MAX, abs=100)
    assert device.luminance == pytest.approx(0.2839, abs=1e-3)


@pytest.mark.parametrize(
    ("value", "dominant"),
    [("ff0000", 0), ("00ff00", 1), ("0000ff", 2)],
)
def test_device_round_trip_keeps_dominant_channel(value, dominant):
    """Primaries survive the trip through device chromaticity."""

    device = hex_to_device(value)
    channels = rgb_from_string(device_to_hex(device.color_x, device.color_y))

    assert channels[dominant] == 255
    assert all(channels[index] < 80 for index in range(3) if index != dominant)


def test_device_round_trip_of_white():
    """White comes back as (nearly) white."""

    device = hex_to_device("ffffff")
    channels = rgb_from_string(device_to_hex(device.color_x, device.color_y))

    assert min(channels) >= 245


def _grid() -> list[str]:
    steps = range(0, 256, 17)
    return [
        rgb_to_string(RGB(red, green, blue))
        for red in steps
        for green in steps
        for blue in steps
    ]


def _drift(first: str, second: str) -> int:
    return max(abs(a - b) for a, b in zip(rgb_from_string(first), rgb_from_string(second)))


def test_device_round_trip_is_stable_within_one_step():
    """A second hex -> device -> hex pass moves no channel by more than 1 LSB."""

    def round_trip(value: str) -> str:
        return device_to_hex(*hex_to_device(value)[:2])

    drifted = []
    for value in _grid():
        first = round_trip(value)
        second = round_trip(first)
        if _drift(first, second) > 1:
            drifted.append((value, first, second))

    assert drifted == []


def test_hue_saturation_round_trip_is_stable_within_one_step():
    """A second hex -> hue/saturation -> hex pass moves no channel by more than 1 LSB."""

    def round_trip(value: str) -> str:
        return hue_saturation_to_hex(*hex_to_hue_saturation(value))

    drifted = []
    for value in _grid():
        first = round_trip(value)
        second = round_trip(first)
        if _drift(first, second) > 1:
            drifted.append((value, first, second))

    assert drifted == []
