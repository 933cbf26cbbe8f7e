"""Parser turning component events into navigation events."""

import re
from abc import ABC
from dataclasses import dataclass

from ..errors import MalformedEventError
from ..interfaces import ComponentEvent

NAV_PREFIX = "hnav:"
CANCEL_ID = "hnav:cancel"
SELECT_MENU_ID = "hnav:selectmenu"

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


class NavigationEvent(ABC):
    """Base class for all navigation events."""

    pass


@dataclass(frozen=True)
class PreviousPage(NavigationEvent):
    """Go back one page."""

    pass


@dataclass(frozen=True)
class NextPage(NavigationEvent):
    """Go forward one page."""

    pass


@dataclass(frozen=True)
class JumpToPage(NavigationEvent):
    """A page button naming a non-adjacent target."""

    index: int


@dataclass(frozen=True)
class SelectCategory(NavigationEvent):
    """A category picked from the select menu."""

    index: int


@dataclass(frozen=True)
class Cancel(NavigationEvent):
    """Close the help message."""

    pass


def page_button_id(index: int) -> str:
    """Custom identifier for a button targeting page ``index``."""
    return f"{NAV_PREFIX}{index}"


class NavigationParser:
    """Parses ``hnav:`` custom identifiers.

    Page buttons carry their absolute target. A target one below or one
    above the current page is reported as PreviousPage / NextPage.
    """

    def parse(self, event: ComponentEvent, current_index: int) -> NavigationEvent:
        """
        Parse a component event.

        Args:
            event: The raw event.
            current_index: Page currently shown.

        Returns:
            The navigation event.

        Raises:
            MalformedEventError: For unknown identifiers or bad values.
        """
        custom_id = event.custom_id

        if custom_id == CANCEL_ID:
            return Cancel()

        if custom_id == SELECT_MENU_ID:
            return SelectCategory(index=self._parse_select_value(event))

        if not custom_id.startswith(NAV_PREFIX):
            raise MalformedEventError(custom_id, "Unknown control")

        target = self._parse_int(custom_id, custom_id[len(NAV_PREFIX):])
        if target == current_index - 1:
            return PreviousPage()
        if target == current_index + 1:
            return NextPage()
        return JumpToPage(index=target)

    def _parse_select_value(self, event: ComponentEvent) -> int:
        if event.kind != "select":
            raise MalformedEventError(event.custom_id, "Invalid interaction type")
        if not event.values:
            raise MalformedEventError(event.custom_id, "No value selected")
        return self._parse_int(event.custom_id, event.values[0])

    def _parse_int(self, custom_id: str, raw: str) -> int:
        # Optionally signed ASCII digits, nothing else
        if not _INDEX_PATTERN.fullmatch(raw):
            raise MalformedEventError(custom_id, f"Not a page number: {raw!r}")
        return int(raw)
