"""Meshtastic Help Navigator - a paginated command reference over mesh radio."""

from .core import CatalogBuilder, HelpOptions, Page, Pager, SessionState
from .errors import (
    CatalogFilterError,
    EmptyCatalogError,
    HelpNavError,
    MalformedEventError,
    NavigationRangeError,
    RemoteOperationError,
)
from .help import help

__all__ = [
    "CatalogBuilder",
    "CatalogFilterError",
    "EmptyCatalogError",
    "HelpNavError",
    "HelpOptions",
    "MalformedEventError",
    "NavigationRangeError",
    "Page",
    "Pager",
    "RemoteOperationError",
    "SessionState",
    "help",
]
