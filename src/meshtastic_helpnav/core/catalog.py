"""Catalog builder: turns the command registry into category pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from ..errors import CatalogFilterError
from ..interfaces import CommandDescriptor, InvocationContext

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
NO_DESCRIPTION = "*No description available yet*"


@dataclass(frozen=True)
class Page:
    """One category's rendered help text."""

    category: str
    body: str


@dataclass
class HelpOptions:
    """Per-invocation knobs for catalog construction.

    Attributes:
        get_category: Maps a raw category key to its display label.
            Must return the same label every time for the same key.
        filter: Extra visibility gate. Replaces the permission checks
            when supplied.
    """

    get_category: Callable[[str | None], str | None] | None = None
    filter: Callable[[InvocationContext, CommandDescriptor], Awaitable[bool]] | None = None


class CatalogBuilder:
    """Builds the ordered page list for one help invocation."""

    def __init__(self, prefix: str = "/"):
        """
        Initialize the builder.

        Args:
            prefix: Text-command prefix shown next to each subcommand.
        """
        self.prefix = prefix

    async def build(
        self,
        commands: Sequence[CommandDescriptor],
        ctx: InvocationContext,
        options: HelpOptions | None = None,
    ) -> list[Page]:
        """
        Build one page per category.

        Categories appear in the order they are first seen in
        ``commands``; within a category, registry order is kept.
        Categories whose commands are all filtered out still get a page.

        Args:
            commands: The registry to read.
            ctx: Invocation context handed to filters and checks.
            options: Optional category namer and filter.

        Returns:
            List of pages.

        Raises:
            CatalogFilterError: If ``options.filter`` raises.
        """
        options = options or HelpOptions()

        categories: dict[str, list[CommandDescriptor]] = {}
        for command in commands:
            label = self._category_label(command.category, options)
            categories.setdefault(label, []).append(command)

        pages = []
        for label, members in categories.items():
            lines: list[str] = []
            for command in members:
                if await self._is_visible(command, ctx, options):
                    lines.extend(self._render_entry(command))
            pages.append(Page(category=label, body="\n".join(lines)))

        logger.debug(f"Built {len(pages)} help page(s) from {len(commands)} command(s)")
        return pages

    def _category_label(self, category: str | None, options: HelpOptions) -> str:
        if options.get_category is not None:
            category = options.get_category(category)
        return category or UNCATEGORIZED

    async def _is_visible(
        self,
        command: CommandDescriptor,
        ctx: InvocationContext,
        options: HelpOptions,
    ) -> bool:
        """Decide whether ``command`` is listed for this invocation."""
        if command.hidden:
            return False

        if options.filter is not None:
            try:
                return bool(await options.filter(ctx, command))
            except Exception as e:
                raise CatalogFilterError(command.name, e) from e

        for check in command.checks:
            try:
                allowed = await check(ctx)
            except Exception as e:
                # A broken check hides the command instead of failing the catalog
                logger.warning(f"Permission check for /{command.name} failed: {e}")
                return False
            if not allowed:
                return False

        return True

    def _render_entry(self, command: CommandDescriptor) -> list[str]:
        """Render one command and its subcommand block."""
        lines = [f"/{command.name} - {command.description or NO_DESCRIPTION}"]

        if command.context_menu_action is not None:
            lines.append(
                f"*This command is a context menu command of type {command.context_menu_action}*"
            )
            return lines

        if command.subcommands:
            lines.append("**Subcommands**")
            for sub in command.subcommands:
                if sub.hidden:
                    continue
                lines.append(
                    f"/{command.name} {sub.name} | {self.prefix}{command.name} {sub.name}"
                    f" - {sub.description or NO_DESCRIPTION}"
                )

        return lines
