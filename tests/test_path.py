"""Tests for dotted path resolution and assignment."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from custom_components.tradfri_bridge.exceptions import PathNotFound
from custom_components.tradfri_bridge.path import Index, Name, parse_path, resolve, write


def _tree() -> dict:
    return {
        "name": "Kitchen",
        "lightList": [{"dimmer": 42, "onOff": True, "colorX": None}],
        "deviceInfo": {"firmwareVersion": "2.3.086"},
    }


def test_parse_path_distinguishes_indexes_from_names():
    """Bracketed integer segments become indexes."""

    assert parse_path("lightList.[0].dimmer") == (
        Name("lightList"),
        Index(0),
        Name("dimmer"),
    )
    assert str(Index(3)) == "[3]"
    assert str(Name("onOff")) == "onOff"


def test_parse_path_rejects_empty_path():
    """An empty string is not a path."""

    with pytest.raises(ValueError):
        parse_path("")


def test_resolve_reads_nested_fields():
    """Keys and indexes are followed in order."""

    tree = _tree()

    assert resolve(tree, "lightList.[0].dimmer") == 42
    assert resolve(tree, "deviceInfo.firmwareVersion") == "2.3.086"
    assert resolve(tree, "name") == "Kitchen"


def test_resolve_returns_none_for_present_none_leaf():
    """A field that exists with a null value resolves to None."""

    assert resolve(_tree(), "lightList.[0].colorX") is None


@pytest.mark.parametrize(
    "path",
    ["sceneId", "lightList.[1].dimmer", "lightList.[0].colorX.value", "name.[0]"],
)
def test_resolve_raises_for_unreachable_paths(path):
    """Missing keys, out of range indexes and null intermediates fail."""

    with pytest.raises(PathNotFound) as err:
        resolve(_tree(), path)

    assert err.value.path == path
    assert isinstance(err.value, LookupError)


def test_resolve_falls_back_to_attributes():
    """Plain objects are traversed through their attributes."""

    device = SimpleNamespace(lights=[SimpleNamespace(dimmer=7)])

    assert resolve(device, "lights.[0].dimmer") == 7
    with pytest.raises(PathNotFound):
        resolve(device, "lights.[0].hue")


def test_write_assigns_nested_values():
    """Writing mutates the addressed container in place."""

    tree = _tree()

    write(tree, "lightList.[0].dimmer", 80)
    write(tree, "deviceInfo.serialNumber", "abc")

    assert tree["lightList"][0]["dimmer"] == 80
    assert tree["deviceInfo"]["serialNumber"] == "abc"
    assert tree["deviceInfo"]["firmwareVersion"] == "2.3.086"


def test_write_requires_existing_parents():
    """Intermediate segments are not created implicitly."""

    tree = _tree()

    with pytest.raises(PathNotFound):
        write(tree, "lightList.[2].dimmer", 1)
    with pytest.raises(PathNotFound):
        write(tree, "missing.value", 1)


def test_write_replaces_sequence_items():
    """An index as the last segment replaces the item."""

    tree = {"values": [1, 2, 3]}

    write(tree, "values.[1]", 20)

    assert tree["values"] == [1, 20, 3]
    with pytest.raises(PathNotFound):
        write(tree, "values.[5]", 0)


@pytest.mark.parametrize(
    "path",
    ["alive.real", "name.upper", "lightList.[0].dimmer.numerator", "lightList.count"],
)
def test_resolve_does_not_descend_into_scalars(path):
    """Attributes of scalars and sequences are not part of the tree."""

    tree = {**_tree(), "alive": True}

    with pytest.raises(PathNotFound):
        resolve(tree, path)


def test_resolve_ignores_methods_of_plain_objects():
    """Only instance attributes of plain objects are addressable."""

    device = SimpleNamespace(dimmer=7)

    with pytest.raises(PathNotFound):
        resolve(device, "__class__")


def test_write_into_scalar_raises_path_not_found():
    """Assigning below a scalar fails with the path error."""

    tree = _tree()

    with pytest.raises(PathNotFound):
        write(tree, "name.foo", 1)
    with pytest.raises(PathNotFound):
        write(tree, "lightList.[0].dimmer.real", 1)
    assert tree["name"] == "Kitchen"


def test_write_sets_attributes_of_plain_objects():
    """Plain objects are written through their attributes."""

    device = SimpleNamespace(light=SimpleNamespace(dimmer=7))

    write(device, "light.dimmer", 9)

    assert device.light.dimmer == 9
