"""Proxy pipeline orchestration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ec2_ssh_proxy.core.config import ProxyParameters
from ec2_ssh_proxy.exceptions import PluginNotFoundError, RemoteError
from ec2_ssh_proxy.providers.aws.compute import EC2Manager
from ec2_ssh_proxy.providers.aws.instance_connect import InstanceConnectManager
from ec2_ssh_proxy.providers.aws.session import AWSClients
from ec2_ssh_proxy.providers.aws.session_manager import SessionHandle, SessionManager
from ec2_ssh_proxy.services.plugin import SessionManagerPlugin

logger = logging.getLogger(__name__)


class ProxyExecutor:
    """Locate the instance, authorize the key, start the session and hand off.

    Parameters
    ----------
    clients_factory : Callable[..., AWSClients]
        Factory called with ``profile`` and ``region`` keyword arguments
    plugin : SessionManagerPlugin
        Session transport
    """

    def __init__(
        self,
        clients_factory: Callable[..., AWSClients],
        plugin: SessionManagerPlugin,
    ) -> None:
        self.clients_factory = clients_factory
        self.plugin = plugin

    def execute(self, params: ProxyParameters) -> None:
        """Run the proxy pipeline; each stage aborts the run on failure.

        Parameters
        ----------
        params : ProxyParameters
            Assembled parameters

        Raises
        ------
        InstanceNotFoundError
            If no instance matches the host
        PluginNotFoundError
            If session-manager-plugin is not available
        RemoteError
            If any AWS call fails
        TransportError
            If the plugin exits with an error
        """
        clients = self.clients_factory(profile=params.profile, region=params.region)

        instance = EC2Manager(clients.ec2).find_instance(params)

        InstanceConnectManager(clients.instance_connect).send_public_key(
            instance, params.user, params.public_key
        )

        self.plugin.check()

        session_manager = SessionManager(clients.ssm)
        handle = session_manager.start_session(instance.instance_id, params.port)

        self._hand_off(session_manager, handle, params.profile)

    def _hand_off(
        self,
        session_manager: SessionManager,
        handle: SessionHandle,
        profile: str | None,
    ) -> None:
        try:
            self.plugin.start(handle, profile)
        except PluginNotFoundError:
            self._terminate_orphaned_session(session_manager, handle)
            raise

    def _terminate_orphaned_session(
        self, session_manager: SessionManager, handle: SessionHandle
    ) -> None:
        try:
            session_manager.terminate_session(handle.session_id)
        except RemoteError as e:
            logger.warning(
                "Failed to terminate session %s: %s", handle.session_id, e
            )


def default_clients_factory(
    boto3_session_factory: Callable[..., Any] | None = None,
) -> Callable[..., AWSClients]:
    """Return a clients factory bound to an optional boto3 session factory."""

    def factory(profile: str | None = None, region: str | None = None) -> AWSClients:
        return AWSClients(
            profile=profile,
            region=region,
            boto3_session_factory=boto3_session_factory,
        )

    return factory
