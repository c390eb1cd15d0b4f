"""Entries of the external state tree."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .const import VIRTUAL_PATH


class EntryKind(str, Enum):
    """Node kinds of the state tree."""

    DEVICE = "device"
    GROUP = "group"
    CHANNEL = "channel"
    STATE = "state"


class DisplaySchema(BaseModel):
    """User facing part of an entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    icon: str | None = None
    read: bool | None = None
    write: bool | None = None
    value_type: str | None = Field(default=None, alias="valueType")
    role: str | None = None
    min: float | None = None
    max: float | None = None
    unit: str | None = None
    default: Any = None
    description: str | None = None
    choices: dict[str, str] | None = None


class TechnicalSchema(BaseModel):
    """Adapter owned part of an entry: the path binding plus free-form data."""

    model_config = ConfigDict(extra="allow")

    path: str | None = None


class Entry(BaseModel):
    """A node of the external tree."""

    id: str
    kind: EntryKind
    display: DisplaySchema
    technical: TechnicalSchema = Field(default_factory=TechnicalSchema)

    @property
    def binding(self) -> str | None:
        """Return the bound path, or None for unbound and virtual entries."""

        path = self.technical.path
        if not path or path == VIRTUAL_PATH:
            return None
        return path


def dump_section(section: BaseModel) -> dict[str, Any]:
    """Return the persisted shape of a display or technical section."""

    return section.model_dump(by_alias=True, exclude_none=True)


def dump_entry(entry: Entry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "kind": entry.kind.value,
        "display": dump_section(entry.display),
        "technical": dump_section(entry.technical),
    }


def load_entry(payload: dict[str, Any]) -> Entry:
    return Entry.model_validate(payload)
