"""Read-only view of the host's command registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

if TYPE_CHECKING:
    from .messenger import Messenger


@dataclass(frozen=True)
class Parameter:
    """A single command parameter."""

    name: str
    description: str | None = None


@dataclass(frozen=True)
class CommandDescriptor:
    """A registered command as seen by the help navigator.

    Attributes:
        name: Command name without prefix.
        description: One-line description, if any.
        category: Raw category key. Must be constant for a given command.
        hidden: Never listed when True.
        parameters: Ordered parameters, shown in the detail view.
        subcommands: One level of child commands.
        checks: Async permission predicates, evaluated in order.
        context_menu_action: Action kind for pure context-menu commands.
    """

    name: str
    description: str | None = None
    category: str | None = None
    hidden: bool = False
    parameters: tuple[Parameter, ...] = ()
    subcommands: tuple[CommandDescriptor, ...] = ()
    checks: tuple[PermissionCheck, ...] = ()
    context_menu_action: str | None = None


@dataclass
class InvocationContext:
    """Everything one help invocation needs from its host.

    Attributes:
        author_id: The user who invoked help; only their events are served.
        messenger: Messaging collaborator for this invocation.
        commands: The host's registry, borrowed read-only.
        data: Opaque host payload for permission checks and filters.
    """

    author_id: str
    messenger: Messenger
    commands: Sequence[CommandDescriptor] = field(default_factory=tuple)
    data: Any = None


PermissionCheck = Callable[[InvocationContext], Awaitable[bool]]
