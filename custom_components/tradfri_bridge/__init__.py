"""Tradfri bridge: mirror gateway accessories, groups and scenes into a state tree."""

from __future__ import annotations

from .config import BridgeConfig
from .const import DOMAIN
from .exceptions import (
    EntryCreationError,
    PathNotFound,
    TradfriBridgeError,
    UnknownEntryError,
)
from .operations import GatewayClient, StateCommandHandler
from .session import BridgeSession
from .store import EntryStore, InMemoryEntryStore
from .sync import EntrySyncEngine, SyncReport

__all__ = [
    "DOMAIN",
    "BridgeConfig",
    "BridgeSession",
    "EntryCreationError",
    "EntryStore",
    "EntrySyncEngine",
    "GatewayClient",
    "InMemoryEntryStore",
    "PathNotFound",
    "StateCommandHandler",
    "SyncReport",
    "TradfriBridgeError",
    "UnknownEntryError",
]
