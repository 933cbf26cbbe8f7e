"""View renderer for help pages and command details."""

from dataclasses import dataclass

from ..interfaces import CommandDescriptor
from .catalog import Page
from .nav_parser import CANCEL_ID, SELECT_MENU_ID, page_button_id

NO_DESCRIPTION = "No description available yet"
CURRENT_SUFFIX = " (current)"


@dataclass(frozen=True)
class Button:
    """A clickable control."""

    custom_id: str
    label: str
    disabled: bool = False
    style: str = "secondary"


@dataclass(frozen=True)
class SelectOption:
    """One entry of a select menu."""

    label: str
    value: str


@dataclass(frozen=True)
class SelectMenu:
    """A single-choice dropdown."""

    custom_id: str
    options: tuple[SelectOption, ...]


@dataclass(frozen=True)
class Field:
    """A titled block inside a detail view."""

    name: str
    value: str


@dataclass(frozen=True)
class HelpView:
    """Transport-neutral content of one help message."""

    title: str = ""
    body: str = ""
    fields: tuple[Field, ...] = ()
    buttons: tuple[Button, ...] = ()
    select: SelectMenu | None = None

    def button(self, label: str) -> Button | None:
        """Find a button by label."""
        for button in self.buttons:
            if button.label == label:
                return button
        return None


class ViewRenderer:
    """Renders pages and command details into HelpViews."""

    def render_page(self, pages: list[Page], index: int) -> HelpView:
        """
        Render page ``index`` with navigation controls.

        Previous is disabled on the first page and Next on the last.
        The select menu lists every category, marking the current one.

        Args:
            pages: The full catalog.
            index: Page to render; must be in range.

        Returns:
            The view.
        """
        page = pages[index]
        buttons = (
            Button(page_button_id(index - 1), "Previous", disabled=index == 0),
            Button(CANCEL_ID, "Cancel", style="danger"),
            Button(page_button_id(index + 1), "Next", disabled=index == len(pages) - 1),
        )
        return HelpView(
            title=f"{page.category} (Page {index + 1})",
            body=page.body,
            buttons=buttons,
            select=self.render_select(pages, index),
        )

    def render_select(self, pages: list[Page], index: int) -> SelectMenu:
        """Build the category jump menu."""
        options = []
        for i, page in enumerate(pages):
            label = page.category + CURRENT_SUFFIX if i == index else page.category
            options.append(SelectOption(label=label, value=str(i)))
        return SelectMenu(custom_id=SELECT_MENU_ID, options=tuple(options))

    def render_command(self, command: CommandDescriptor) -> HelpView:
        """
        Render the static detail view for one command.

        Lists the command's parameters, then one field per subcommand
        with that subcommand's parameters.
        """
        params = "\n".join(
            f"{p.name} - {p.description or NO_DESCRIPTION}" for p in command.parameters
        )
        fields = [Field("Parameters", params)]

        for sub in command.subcommands:
            sub_params = "\n".join(
                f"*{p.name}* - {p.description or NO_DESCRIPTION}" for p in sub.parameters
            )
            fields.append(Field(sub.name, f"{sub.description or NO_DESCRIPTION}\n{sub_params}"))

        return HelpView(
            title=f"Help for {command.name}",
            body=command.description or NO_DESCRIPTION,
            fields=tuple(fields),
        )

    def render_not_found(self) -> HelpView:
        """Fallback when no command matches."""
        return HelpView(body="Command not found!")
