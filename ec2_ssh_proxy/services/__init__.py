"""Local services used by ec2-ssh-proxy."""

from ec2_ssh_proxy.services.plugin import (
    SessionManagerPlugin,
    SubprocessSessionManagerPlugin,
    build_plugin_arguments,
)

__all__ = [
    "SessionManagerPlugin",
    "SubprocessSessionManagerPlugin",
    "build_plugin_arguments",
]
