"""Transports for the Meshtastic help navigator."""

from .mesh_messenger import MeshMessenger
from .meshtastic_transport import MeshtasticTransport

__all__ = ["MeshMessenger", "MeshtasticTransport"]
