"""Colour conversions between hex RGB, hue/saturation and device chromaticity.

The gateway encodes colours as CIE xy chromaticity scaled to ``0..65279``.
Conversions go through linear RGB with the wide gamut D65 matrices; points
outside a lamp's gamut triangle are moved onto the nearest triangle edge.
"""

from __future__ import annotations

import colorsys
from typing import NamedTuple

DEVICE_COLOR_MAX = 65279


class RGB(NamedTuple):
    """8-bit RGB triple."""

    red: int
    green: int
    blue: int


class XYColor(NamedTuple):
    """CIE xy chromaticity with relative luminance ``Y``."""

    x: float
    y: float
    luminance: float


class Point(NamedTuple):
    """Point on the xy chromaticity plane."""

    x: float
    y: float


class Gamut(NamedTuple):
    """Chromaticities of a lamp's three primaries."""

    red: Point
    green: Point
    blue: Point


class DeviceColor(NamedTuple):
    """Chromaticity in protocol units plus luminance in ``0..1``."""

    color_x: int
    color_y: int
    luminance: float


RGB_GAMUT = Gamut(
    red=Point(0.7006, 0.2993),
    green=Point(0.1387, 0.8148),
    blue=Point(0.1510, 0.0227),
)


def rgb_from_string(value: str) -> RGB:
    """Parse a 6-digit hex colour, with or without a leading ``#``."""

    text = value.strip().removeprefix("#")
    if len(text) != 6:
        raise ValueError(f"Expected a 6-digit hex colour, got {value!r}")
    try:
        number = int(text, 16)
    except ValueError as exc:
        raise ValueError(f"Expected a 6-digit hex colour, got {value!r}") from exc
    return RGB((number >> 16) & 0xFF, (number >> 8) & 0xFF, number & 0xFF)


def rgb_to_string(rgb: RGB | tuple[int, int, int]) -> str:
    """Format an RGB triple as a lowercase 6-digit hex string."""

    red, green, blue = (max(0, min(255, int(channel))) for channel in rgb)
    return f"{red:02x}{green:02x}{blue:02x}"


def _gamma(channel: float) -> float:
    if channel > 0.04045:
        return ((channel + 0.055) / 1.055) ** 2.4
    return channel / 12.92


def _inverse_gamma(channel: float) -> float:
    if channel <= 0.0031308:
        return 12.92 * channel
    return 1.055 * channel ** (1.0 / 2.4) - 0.055


def _cross(origin: Point, a: Point, b: Point) -> float:
    return (a.x - origin.x) * (b.y - origin.y) - (a.y - origin.y) * (b.x - origin.x)


def point_in_triangle(gamut: Gamut, point: Point) -> bool:
    """Return True when ``point`` lies inside (or on) the gamut triangle."""

    d1 = _cross(point, gamut.red, gamut.green)
    d2 = _cross(point, gamut.green, gamut.blue)
    d3 = _cross(point, gamut.blue, gamut.red)
    has_negative = d1 < 0 or d2 < 0 or d3 < 0
    has_positive = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_negative and has_positive)


def _closest_point_on_segment(start: Point, end: Point, point: Point) -> Point:
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return start
    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(start.x + t * dx, start.y + t * dy)


def closest_point_in_gamut(gamut: Gamut, point: Point) -> Point:
    """Return ``point`` if reproducible, else the nearest point on an edge."""

    if point_in_triangle(gamut, point):
        return point
    candidates = (
        _closest_point_on_segment(gamut.red, gamut.green, point),
        _closest_point_on_segment(gamut.green, gamut.blue, point),
        _closest_point_on_segment(gamut.blue, gamut.red, point),
    )
    return min(
        candidates,
        key=lambda candidate: (candidate.x - point.x) ** 2 + (candidate.y - point.y) ** 2,
    )


def rgb_to_xy(rgb: RGB | tuple[int, int, int], gamut: Gamut | None = None) -> XYColor:
    """Convert 8-bit RGB into xy chromaticity and luminance."""

    red, green, blue = (_gamma(channel / 255) for channel in rgb)
    big_x = red * 0.664511 + green * 0.154324 + blue * 0.162028
    big_y = red * 0.283881 + green * 0.668433 + blue * 0.047685
    big_z = red * 0.000088 + green * 0.072310 + blue * 0.986039
    total = big_x + big_y + big_z
    if total <= 0:
        return XYColor(0.0, 0.0, 0.0)
    point = Point(big_x / total, big_y / total)
    if gamut is not None:
        point = closest_point_in_gamut(gamut, point)
    return XYColor(point.x, point.y, big_y)


def rgb_from_xy(x: float, y: float, luminance: float = 1.0) -> RGB:
    """Convert xy chromaticity and luminance back into 8-bit RGB."""

    if y <= 0 or luminance <= 0:
        return RGB(0, 0, 0)
    z = 1.0 - x - y
    big_x = luminance / y * x
    big_z = luminance / y * z
    red = big_x * 1.656492 - luminance * 0.354851 - big_z * 0.255038
    green = -big_x * 0.707196 + luminance * 1.655397 + big_z * 0.036152
    blue = big_x * 0.051713 - luminance * 0.121364 + big_z * 1.011530

    peak = max(red, green, blue)
    if peak > 1:
        red, green, blue = red / peak, green / peak, blue / peak

    channels = []
    for channel in (red, green, blue):
        corrected = _inverse_gamma(max(0.0, channel))
        channels.append(round(max(0.0, min(1.0, corrected)) * 255))
    return RGB(*channels)


def to_device_units(x: float, y: float) -> tuple[int, int]:
    """Scale xy chromaticity into protocol units."""

    return round(x * DEVICE_COLOR_MAX), round(y * DEVICE_COLOR_MAX)


def from_device_units(color_x: int, color_y: int) -> Point:
    """Scale protocol chromaticity back to the xy plane."""

    return Point(color_x / DEVICE_COLOR_MAX, color_y / DEVICE_COLOR_MAX)


def hex_to_device(value: str, gamut: Gamut | None = RGB_GAMUT) -> DeviceColor:
    """Convert a hex colour into device chromaticity and luminance."""

    xy = rgb_to_xy(rgb_from_string(value), gamut)
    color_x, color_y = to_device_units(xy.x, xy.y)
    return DeviceColor(color_x, color_y, xy.luminance)


def device_to_hex(color_x: int, color_y: int, luminance: float = 1.0) -> str:
    """Convert device chromaticity into a hex colour."""

    point = from_device_units(color_x, color_y)
    return rgb_to_string(rgb_from_xy(point.x, point.y, luminance))


def hex_to_hue_saturation(value: str) -> tuple[int, int]:
    """Return hue in degrees (0-360) and saturation in percent (0-100)."""

    red, green, blue = rgb_from_string(value)
    hue, saturation, _value = colorsys.rgb_to_hsv(red / 255, green / 255, blue / 255)
    return round(hue * 360) % 360, round(saturation * 100)


def hue_saturation_to_hex(hue: float, saturation: float, brightness: float = 100) -> str:
    """Return the hex colour for hue (degrees), saturation and brightness (percent)."""

    red, green, blue = colorsys.hsv_to_rgb(
        (hue % 360) / 360,
        max(0.0, min(100.0, saturation)) / 100,
        max(0.0, min(100.0, brightness)) / 100,
    )
    return rgb_to_string(RGB(round(red * 255), round(green * 255), round(blue * 255)))
