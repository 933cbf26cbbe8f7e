"""Abstract interfaces for the Meshtastic help navigator."""

from .command_registry import CommandDescriptor, InvocationContext, Parameter, PermissionCheck
from .message_transport import MessageTransport
from .messenger import ComponentEvent, EventStream, MessageRef, Messenger

__all__ = [
    "CommandDescriptor",
    "ComponentEvent",
    "EventStream",
    "InvocationContext",
    "MessageRef",
    "MessageTransport",
    "Messenger",
    "Parameter",
    "PermissionCheck",
]
