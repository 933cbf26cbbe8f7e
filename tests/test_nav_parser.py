"""Tests for the NavigationParser module."""

import pytest

from conftest import button, select
from meshtastic_helpnav.core.nav_parser import (
    Cancel,
    JumpToPage,
    NavigationParser,
    NextPage,
    PreviousPage,
    SelectCategory,
    page_button_id,
)
from meshtastic_helpnav.errors import MalformedEventError
from meshtastic_helpnav.interfaces import ComponentEvent


class TestNavigationParser:
    """Tests for NavigationParser."""

    @pytest.fixture
    def parser(self):
        return NavigationParser()

    def test_cancel(self, parser):
        """hnav:cancel is Cancel."""
        assert parser.parse(button("hnav:cancel"), 0) == Cancel()

    def test_previous(self, parser):
        """A target one below the current page is PreviousPage."""
        assert parser.parse(button("hnav:1"), 2) == PreviousPage()

    def test_next(self, parser):
        """A target one above the current page is NextPage."""
        assert parser.parse(button("hnav:3"), 2) == NextPage()

    def test_non_adjacent_target(self, parser):
        """Other targets are JumpToPage."""
        assert parser.parse(button("hnav:7"), 2) == JumpToPage(index=7)

    def test_signed_target(self, parser):
        """A negative target parses; range checks happen later."""
        assert parser.parse(button("hnav:-1"), 0) == PreviousPage()
        assert parser.parse(button("hnav:-5"), 0) == JumpToPage(index=-5)

    def test_select(self, parser):
        """The select menu carries the target index as its value."""
        assert parser.parse(select("2"), 0) == SelectCategory(index=2)

    def test_select_empty_values(self, parser):
        """An empty selection is an internal error."""
        with pytest.raises(MalformedEventError, match="No value selected"):
            parser.parse(select(None), 0)

    def test_select_non_numeric(self, parser):
        """A non-numeric value is an internal error."""
        with pytest.raises(MalformedEventError):
            parser.parse(select("abc"), 0)

    def test_select_wrong_kind(self, parser):
        """A button carrying the select id is rejected."""
        event = ComponentEvent(author_id="!user", custom_id="hnav:selectmenu", values=("1",))
        with pytest.raises(MalformedEventError, match="Invalid interaction type"):
            parser.parse(event, 0)

    def test_garbage_index(self, parser):
        """Unparseable page buttons are rejected."""
        with pytest.raises(MalformedEventError):
            parser.parse(button("hnav:next"), 0)

    @pytest.mark.parametrize("custom_id", ["hnav:1_0", "hnav: 1", "hnav:1 ", "hnav:\u0661", "hnav:+"])
    def test_strict_index_digits(self, parser, custom_id):
        """Only plain ASCII digits with an optional sign are page indices."""
        with pytest.raises(MalformedEventError, match="Not a page number"):
            parser.parse(button(custom_id), 0)

    def test_select_value_strict(self, parser):
        """Padded select values are rejected."""
        with pytest.raises(MalformedEventError, match="Not a page number"):
            parser.parse(select(" 2"), 0)

    def test_foreign_identifier(self, parser):
        """Identifiers outside the hnav namespace are rejected."""
        with pytest.raises(MalformedEventError, match="Unknown control"):
            parser.parse(button("vote:yes"), 0)

    def test_page_button_id(self):
        """page_button_id builds the wire identifier."""
        assert page_button_id(4) == "hnav:4"
        assert page_button_id(-1) == "hnav:-1"
