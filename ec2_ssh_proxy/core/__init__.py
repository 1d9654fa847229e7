"""Core ec2-ssh-proxy functionality."""

from __future__ import annotations

from ec2_ssh_proxy.core.host_pattern import (
    HostAttributes,
    compile_host_pattern,
    resolve_host,
)
from ec2_ssh_proxy.core.signals import ignore_user_signals, user_signals

__all__ = [
    "HostAttributes",
    "compile_host_pattern",
    "resolve_host",
    "ignore_user_signals",
    "user_signals",
]
