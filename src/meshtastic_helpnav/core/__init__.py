"""Core components for the Meshtastic help navigator."""

from .catalog import CatalogBuilder, HelpOptions, Page, UNCATEGORIZED
from .event_stream import QueueEventStream
from .nav_parser import (
    Cancel,
    JumpToPage,
    NavigationEvent,
    NavigationParser,
    NextPage,
    PreviousPage,
    SelectCategory,
)
from .pager import Pager
from .session import Session, SessionState, Target
from .session_manager import ActiveSession, SessionManager
from .text_splitter import TextSplitter
from .views import Button, Field, HelpView, SelectMenu, SelectOption, ViewRenderer

__all__ = [
    "ActiveSession",
    "Button",
    "Cancel",
    "CatalogBuilder",
    "Field",
    "HelpOptions",
    "HelpView",
    "JumpToPage",
    "NavigationEvent",
    "NavigationParser",
    "NextPage",
    "Page",
    "Pager",
    "PreviousPage",
    "QueueEventStream",
    "SelectCategory",
    "SelectMenu",
    "SelectOption",
    "Session",
    "SessionManager",
    "SessionState",
    "Target",
    "TextSplitter",
    "UNCATEGORIZED",
    "ViewRenderer",
]
