"""Read and write nested values by dotted path.

Paths are split on ``.``; a segment written as ``[<integer>]`` indexes into a
sequence, every other segment is a mapping key (or attribute name for plain
objects). ``"lightList.[0].dimmer"`` reads ``tree["lightList"][0]["dimmer"]``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any

from .exceptions import PathNotFound

_INDEX_PATTERN = re.compile(r"^\[(\d+)\]$")
_SCALARS = (str, bytes, int, float, bool)


@dataclass(frozen=True, slots=True)
class Name:
    """Mapping key (or attribute) segment."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class Index:
    """Sequence index segment."""

    position: int

    def __str__(self) -> str:
        return f"[{self.position}]"


Segment = Name | Index


def parse_path(path: str) -> tuple[Segment, ...]:
    """Split ``path`` into typed segments."""

    if not path:
        raise ValueError("Path must not be empty")
    segments: list[Segment] = []
    for part in path.split("."):
        match = _INDEX_PATTERN.match(part)
        if match:
            segments.append(Index(int(match.group(1))))
        else:
            segments.append(Name(part))
    return tuple(segments)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _attributes(value: Any) -> dict[str, Any] | None:
    """Return the instance attributes of a plain object, None for scalars."""

    if isinstance(value, _SCALARS) or _is_sequence(value):
        return None
    return getattr(value, "__dict__", None)


def _step(current: Any, segment: Segment, path: str) -> Any:
    """Return the child of ``current`` addressed by ``segment``."""

    if current is None:
        raise PathNotFound(path, str(segment))
    if isinstance(segment, Index):
        if not _is_sequence(current) or segment.position >= len(current):
            raise PathNotFound(path, str(segment))
        return current[segment.position]
    if isinstance(current, Mapping):
        if segment.key not in current:
            raise PathNotFound(path, str(segment))
        return current[segment.key]
    attributes = _attributes(current)
    if attributes is None or segment.key not in attributes:
        raise PathNotFound(path, str(segment))
    return attributes[segment.key]


def resolve(root: Any, path: str) -> Any:
    """Return the value at ``path`` inside ``root``.

    Raises ``PathNotFound`` as soon as a value needed to continue the
    traversal is missing or ``None``. A leaf that exists with the value
    ``None`` is returned as-is.
    """

    current = root
    for segment in parse_path(path):
        current = _step(current, segment, path)
    return current


def write(root: Any, path: str, value: Any) -> None:
    """Assign ``value`` at ``path`` inside ``root``.

    Every segment except the last one must already exist.
    """

    segments = parse_path(path)
    container = root
    for segment in segments[:-1]:
        container = _step(container, segment, path)

    last = segments[-1]
    if container is None:
        raise PathNotFound(path, str(last))
    if isinstance(last, Index):
        if not isinstance(container, MutableSequence) or last.position >= len(container):
            raise PathNotFound(path, str(last))
        container[last.position] = value
    elif isinstance(container, MutableMapping):
        container[last.key] = value
    elif _attributes(container) is not None:
        setattr(container, last.key, value)
    else:
        raise PathNotFound(path, str(last))
