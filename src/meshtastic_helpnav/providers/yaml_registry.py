"""Command registry loaded from a YAML file."""

import logging
from pathlib import Path
from typing import Any

import yaml

from ..interfaces import CommandDescriptor, InvocationContext, Parameter, PermissionCheck

logger = logging.getLogger(__name__)


def allow_nodes(node_ids: list[str]) -> PermissionCheck:
    """
    Build a permission check that admits only the given nodes.

    Args:
        node_ids: Node IDs allowed to see the command.

    Returns:
        Async predicate over the invocation context.
    """
    allowed = frozenset(node_ids)

    async def check(ctx: InvocationContext) -> bool:
        return ctx.author_id in allowed

    return check


def _parse_parameter(command: str, data: Any) -> Parameter:
    if isinstance(data, str):
        return Parameter(name=data)
    if isinstance(data, dict) and data.get("name"):
        return Parameter(name=str(data["name"]), description=data.get("description"))
    raise ValueError(f"Malformed parameter for /{command}: {data!r}")


def parse_command(data: dict[str, Any], *, nested: bool = False) -> CommandDescriptor:
    """
    Build a CommandDescriptor from one YAML mapping.

    Args:
        data: Mapping with at least a ``name`` key.
        nested: True for subcommands, which cannot have subcommands.

    Returns:
        The descriptor.

    Raises:
        ValueError: If the entry is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Command entry must be a mapping, got {type(data).__name__}")

    name = data.get("name")
    if not name or not isinstance(name, str):
        raise ValueError(f"Command entry without a name: {data!r}")

    parameters = tuple(_parse_parameter(name, p) for p in data.get("parameters") or ())

    raw_subcommands = data.get("subcommands") or ()
    if nested and raw_subcommands:
        raise ValueError(f"Subcommand /{name} cannot have subcommands")
    subcommands = tuple(parse_command(sub, nested=True) for sub in raw_subcommands)

    checks: tuple[PermissionCheck, ...] = ()
    allowed = data.get("allowed_nodes")
    if isinstance(allowed, str):
        allowed = [allowed]
    elif allowed is not None and not isinstance(allowed, list):
        raise ValueError(f"/{name}: allowed_nodes must be a node ID or a list of them")
    if allowed:
        checks = (allow_nodes([str(node) for node in allowed]),)

    hidden = data.get("hidden", False)
    if not isinstance(hidden, bool):
        raise ValueError(f"/{name}: hidden must be true or false, got {hidden!r}")

    return CommandDescriptor(
        name=name,
        description=data.get("description"),
        category=data.get("category"),
        hidden=hidden,
        parameters=parameters,
        subcommands=subcommands,
        checks=checks,
        context_menu_action=data.get("context_menu"),
    )


def load_registry(path: str | Path) -> list[CommandDescriptor]:
    """
    Load the command registry from a YAML file.

    The file holds a top-level ``commands`` list.

    Args:
        path: Path to the YAML registry file.

    Returns:
        Commands in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If an entry is malformed.
    """
    registry_path = Path(path).expanduser()

    if not registry_path.exists():
        raise FileNotFoundError(f"Registry file not found: {path}")

    with open(registry_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Registry must be a mapping with a 'commands' list, got {type(data).__name__}")

    entries = data.get("commands") or []
    if not isinstance(entries, list):
        raise ValueError(f"'commands' must be a list, got {type(entries).__name__}")

    commands = [parse_command(entry) for entry in entries]
    logger.info(f"Loaded {len(commands)} command(s) from {registry_path}")
    return commands
