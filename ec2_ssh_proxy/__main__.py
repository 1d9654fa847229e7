#!/usr/bin/env python3
"""ec2-ssh-proxy - SSH ProxyCommand for EC2 instances."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fire import decorators

from ec2_ssh_proxy.cli.main import main
from ec2_ssh_proxy.cli.parsing import apply_cli_overrides
from ec2_ssh_proxy.core.config import ConfigLoader, ProxyParameters
from ec2_ssh_proxy.core.proxy_executor import ProxyExecutor, default_clients_factory
from ec2_ssh_proxy.providers.aws.session import AWSClients
from ec2_ssh_proxy.services.plugin import (
    SessionManagerPlugin,
    SubprocessSessionManagerPlugin,
)

logger = logging.getLogger(__name__)


class EC2SSHProxy:
    """Main CLI interface for ec2-ssh-proxy."""

    def __init__(
        self,
        clients_factory: Callable[..., AWSClients] | None = None,
        plugin_factory: Callable[[], SessionManagerPlugin] | None = None,
        boto3_session_factory: Callable[..., Any] | None = None,
    ) -> None:
        """Initialize EC2SSHProxy with optional dependency injection."""
        self._config_loader = ConfigLoader()
        self._clients_factory = clients_factory or default_clients_factory(
            boto3_session_factory
        )
        self._plugin_factory = plugin_factory or SubprocessSessionManagerPlugin

    def build_parameters(
        self,
        host: str,
        port: str | int,
        pattern: str | None = None,
        profile: str | None = None,
        public_key: str | None = None,
        user: str | None = None,
        region: str | None = None,
    ) -> ProxyParameters:
        """Merge defaults, config file and CLI flags and read the public key."""
        config = self._config_loader.get_config(self._config_loader.load_config())
        apply_cli_overrides(
            config,
            pattern=pattern,
            profile=profile,
            public_key=public_key,
            user=user,
            region=region,
        )
        return self._config_loader.build_parameters(host, port, config)

    # Command-line values reach proxy() as raw text, never as literals.
    @decorators.SetParseFns(
        host=str,
        port=str,
        pattern=str,
        profile=str,
        public_key=str,
        user=str,
        region=str,
    )
    def proxy(
        self,
        host: str,
        port: int,
        pattern: str | None = None,
        profile: str | None = None,
        public_key: str | None = None,
        user: str | None = None,
        region: str | None = None,
        verbose: bool = False,
    ) -> None:
        """Connect stdio to an EC2 instance's SSH port through SSM.

        Intended for use as an OpenSSH ProxyCommand:
        ``ProxyCommand ec2-ssh-proxy %h %p``.

        Parameters
        ----------
        host : str
            Host name given to ssh, matched against the pattern
        port : int
            Remote SSH port
        pattern : str | None
            Host name pattern with {name}, {id} and {profile} placeholders
            (default: ec2.{name})
        profile : str | None
            AWS credentials profile; overrides a profile taken from the host name
        public_key : str | None
            SSH public key file (default: ~/.ssh/id_rsa.pub)
        user : str | None
            OS user on the EC2 instance (default: ec2-user)
        region : str | None
            AWS region (default: from the AWS profile)
        verbose : bool
            Log debug output to stderr
        """
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        params = self.build_parameters(
            host,
            port,
            pattern=pattern,
            profile=profile,
            public_key=public_key,
            user=user,
            region=region,
        )
        logger.debug(
            "Proxying %s:%d (name=%s, id=%s, profile=%s, user=%s)",
            host,
            params.port,
            params.name,
            params.id,
            params.profile,
            params.user,
        )

        executor = ProxyExecutor(
            clients_factory=self._clients_factory,
            plugin=self._plugin_factory(),
        )
        executor.execute(params)


if __name__ == "__main__":
    main()
