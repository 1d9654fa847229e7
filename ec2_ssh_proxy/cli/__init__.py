"""CLI argument parsing and handling."""

from __future__ import annotations

from ec2_ssh_proxy.cli.parsing import apply_cli_overrides, parse_port

__all__ = [
    "apply_cli_overrides",
    "parse_port",
]
