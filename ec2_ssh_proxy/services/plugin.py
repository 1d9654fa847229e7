"""Hand-off to the session-manager-plugin transport."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from typing import Protocol

from ec2_ssh_proxy.constants import (
    SESSION_MANAGER_OPERATION,
    SESSION_MANAGER_PLUGIN,
    SESSION_MANAGER_PLUGIN_NOT_FOUND,
)
from ec2_ssh_proxy.core.signals import ignore_user_signals
from ec2_ssh_proxy.exceptions import PluginNotFoundError, TransportError
from ec2_ssh_proxy.providers.aws.session_manager import SessionHandle

logger = logging.getLogger(__name__)


class SessionManagerPlugin(Protocol):
    """Session transport able to carry an SSM session over stdio."""

    def check(self) -> None:
        """Raise PluginNotFoundError if the transport is unavailable."""
        ...

    def start(self, handle: SessionHandle, profile: str | None) -> None:
        """Run the transport until the session ends."""
        ...


def build_plugin_arguments(handle: SessionHandle, profile: str | None) -> list[str]:
    """Build the positional arguments understood by session-manager-plugin.

    Parameters
    ----------
    handle : SessionHandle
        Started session
    profile : str | None
        AWS credentials profile name, passed as an empty string when unset

    Returns
    -------
    list[str]
        Response JSON, signing region, operation, profile, request JSON, endpoint
    """
    return [
        json.dumps(handle.response),
        handle.signing_region,
        SESSION_MANAGER_OPERATION,
        profile or "",
        json.dumps(handle.request),
        handle.endpoint,
    ]


class SubprocessSessionManagerPlugin:
    """Run session-manager-plugin as a child process sharing our stdio."""

    def __init__(self, executable: str = SESSION_MANAGER_PLUGIN) -> None:
        self.executable = executable

    def check(self) -> None:
        """Verify the plugin executable is on PATH.

        Raises
        ------
        PluginNotFoundError
            If the executable cannot be found
        """
        if not shutil.which(self.executable):
            raise PluginNotFoundError(SESSION_MANAGER_PLUGIN_NOT_FOUND)

    def start(self, handle: SessionHandle, profile: str | None) -> None:
        """Run the plugin until it exits.

        stdin, stdout and stderr are inherited so the SSH stream passes
        through untouched. Interactive signals are left to the child.

        Parameters
        ----------
        handle : SessionHandle
            Started session
        profile : str | None
            AWS credentials profile name

        Raises
        ------
        PluginNotFoundError
            If the executable disappeared since the availability check
        TransportError
            If the plugin exits with a non-zero status
        """
        cmd = [self.executable, *build_plugin_arguments(handle, profile)]
        logger.debug("Executing %s for session %s", self.executable, handle.session_id)

        with ignore_user_signals():
            try:
                result = subprocess.run(cmd, check=False)
            except FileNotFoundError as e:
                raise PluginNotFoundError(SESSION_MANAGER_PLUGIN_NOT_FOUND) from e

        if result.returncode != 0:
            raise TransportError(result.returncode)

        logger.debug("Session %s finished", handle.session_id)
