"""Command-line interface for the Meshtastic help navigator."""

import argparse
import asyncio
import logging
import signal
import sys
from dataclasses import replace

from .config import Config, load_config
from .providers import load_registry
from .server import HelpServer
from .transport import MeshtasticTransport


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Meshtastic Help Navigator - Browse a command reference over mesh radio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Use default config
  %(prog)s -c config.yaml           # Use specific config file
  %(prog)s -r commands.yaml         # Specify command registry
  %(prog)s --timeout 300            # Keep help sessions open for 5 minutes
  %(prog)s --serial /dev/ttyUSB0    # Use specific serial port
  %(prog)s --ble AA:BB:CC:DD:EE:FF  # Use Bluetooth device
  %(prog)s --tcp 192.168.1.100      # Use TCP connection
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-r", "--registry",
        metavar="FILE",
        help="Path to YAML command registry",
    )

    parser.add_argument(
        "-t", "--timeout",
        metavar="SECONDS",
        type=float,
        help="Help session lifetime in seconds",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    # Connection options (mutually exclusive)
    conn_group = parser.add_mutually_exclusive_group()
    conn_group.add_argument(
        "--serial",
        metavar="PORT",
        nargs="?",
        const="auto",
        help="Use serial connection (default: auto-detect)",
    )
    conn_group.add_argument(
        "--ble",
        metavar="ADDRESS",
        help="Use Bluetooth LE connection",
    )
    conn_group.add_argument(
        "--tcp",
        metavar="HOST",
        help="Use TCP connection",
    )

    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Override config values with command line arguments."""
    if args.registry:
        config = replace(config, registry_file=args.registry)

    if args.timeout is not None:
        config = replace(config, session_timeout_seconds=args.timeout)

    if args.serial is not None:
        device = None if args.serial == "auto" else args.serial
        config = replace(config, connection_type="serial", device=device)
    elif args.ble:
        config = replace(config, connection_type="ble", device=args.ble)
    elif args.tcp:
        config = replace(config, connection_type="tcp", device=args.tcp)

    return config


async def serve(server: HelpServer) -> None:
    """Run the server until SIGINT or SIGTERM."""
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    server.start()
    logging.getLogger(__name__).info("Server running. Press Ctrl+C to stop.")
    try:
        await stop.wait()
        logging.getLogger(__name__).info("Shutdown signal received")
    finally:
        await server.stop()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    # Load configuration
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error(f"Config file not found: {args.config}")
            return 1
    else:
        config = Config()

    config = apply_overrides(config, args)

    registry_path = config.get_registry_path()
    try:
        commands = load_registry(registry_path)
    except FileNotFoundError:
        logger.error(f"Command registry does not exist: {registry_path}")
        logger.info("Create a registry file or specify a different path with -r")
        return 1
    except ValueError as e:
        logger.error(f"Invalid command registry: {e}")
        return 1

    # Create components
    try:
        transport = MeshtasticTransport(
            connection_type=config.connection_type,
            device=config.device,
        )
        server = HelpServer(commands, transport, config)
    except Exception as e:
        logger.error(f"Failed to initialize server: {e}")
        return 1

    logger.info("Starting help server...")
    logger.info(f"  Registry: {registry_path} ({len(commands)} commands)")
    logger.info(f"  Connection: {config.connection_type}" + (f" ({config.device})" if config.device else ""))
    logger.info(f"  Session timeout: {config.session_timeout_seconds}s")

    try:
        asyncio.run(serve(server))
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
