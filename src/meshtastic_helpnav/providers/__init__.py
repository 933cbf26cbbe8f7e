"""Command registry providers."""

from .yaml_registry import allow_nodes, load_registry, parse_command

__all__ = ["allow_nodes", "load_registry", "parse_command"]
