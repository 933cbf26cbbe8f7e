"""Configuration handling for the Meshtastic help navigator."""

from dataclasses import dataclass, field
from pathlib import Path
import yaml


@dataclass
class Config:
    """Configuration settings for the help server.

    Attributes:
        registry_file: YAML file listing the commands to document.
        prefix: Text-command prefix shown next to subcommands.
        max_message_size: Maximum characters per mesh message.
        categories: Raw category key -> display label.
        connection_type: Meshtastic connection type (serial, ble, tcp).
        device: Device path, BLE address, or hostname.
        ack_timeout_seconds: Seconds to wait for a delivery ACK.
        session_timeout_seconds: Lifetime of one help session.
    """

    registry_file: str = "~/helpnav/commands.yaml"
    prefix: str = "/"
    max_message_size: int = 230
    categories: dict[str, str] = field(default_factory=dict)
    connection_type: str = "serial"
    device: str | None = None
    ack_timeout_seconds: float = 30.0
    session_timeout_seconds: float = 120.0

    def get_registry_path(self) -> Path:
        """Get the registry file as expanded Path object."""
        return Path(self.registry_file).expanduser()


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    help_section = data.get("help", {})
    meshtastic = data.get("meshtastic", {})
    session = data.get("session", {})

    return Config(
        registry_file=help_section.get("registry_file", Config.registry_file),
        prefix=help_section.get("prefix", Config.prefix),
        max_message_size=help_section.get("max_message_size", Config.max_message_size),
        categories=dict(help_section.get("categories") or {}),
        connection_type=meshtastic.get("connection_type", Config.connection_type),
        device=meshtastic.get("device", Config.device),
        ack_timeout_seconds=meshtastic.get("ack_timeout_seconds", Config.ack_timeout_seconds),
        session_timeout_seconds=session.get("timeout_seconds", Config.session_timeout_seconds),
    )
