"""The help command entry point."""

import logging

from .core import CatalogBuilder, HelpOptions, Pager, SessionState, ViewRenderer
from .core.pager import DEFAULT_TIMEOUT_SECONDS
from .interfaces import InvocationContext

logger = logging.getLogger(__name__)


async def help(
    ctx: InvocationContext,
    command: str | None = None,
    prefix: str = "/",
    options: HelpOptions | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> SessionState | None:
    """
    Show help for the invoking user.

    With ``command`` set, sends a single static detail view for that
    command (or a "not found" note). Otherwise builds the categorized
    catalog and runs an interactive pager over it.

    Args:
        ctx: The invocation context.
        command: Optional command name to describe.
        prefix: Text-command prefix shown for subcommands.
        options: Category namer and command filter.
        timeout: Lifetime of the interactive session in seconds.

    Returns:
        The pager's terminal state, or None for the detail view.

    Raises:
        HelpNavError: On any fatal error, including an empty catalog.
    """
    renderer = ViewRenderer()

    if command is not None:
        for descriptor in ctx.commands:
            if descriptor.name == command:
                logger.info(f"[{ctx.author_id}] Help for /{command}")
                await ctx.messenger.send_new(renderer.render_command(descriptor))
                return None

        logger.info(f"[{ctx.author_id}] Help requested for unknown command {command!r}")
        await ctx.messenger.send_new(renderer.render_not_found())
        return None

    pages = await CatalogBuilder(prefix).build(ctx.commands, ctx, options)
    pager = Pager(pages, ctx.messenger, ctx.author_id, timeout=timeout)
    return await pager.run()
