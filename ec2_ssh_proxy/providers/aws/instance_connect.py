"""EC2 Instance Connect public key authorization."""

from __future__ import annotations

import logging
from typing import Any

from ec2_ssh_proxy.exceptions import RemoteError
from ec2_ssh_proxy.providers.aws.compute import InstanceRef
from ec2_ssh_proxy.providers.aws.errors import handle_aws_errors

logger = logging.getLogger(__name__)


class InstanceConnectManager:
    """Push short-lived SSH public keys through EC2 Instance Connect."""

    def __init__(self, instance_connect_client: Any) -> None:
        self.instance_connect_client = instance_connect_client

    def send_public_key(self, instance: InstanceRef, user: str, public_key: str) -> None:
        """Authorize a public key for an OS user on the instance.

        Parameters
        ----------
        instance : InstanceRef
            Target instance
        user : str
            OS user on the instance
        public_key : str
            OpenSSH public key text

        Raises
        ------
        RemoteError
            If the API call fails or reports no success
        """
        with handle_aws_errors():
            response = self.instance_connect_client.send_ssh_public_key(
                AvailabilityZone=instance.availability_zone,
                InstanceId=instance.instance_id,
                InstanceOSUser=user,
                SSHPublicKey=public_key,
            )

        if response.get("Success") is False:
            raise RemoteError(
                f"EC2 Instance Connect rejected the public key for {user}@{instance.instance_id}"
            )

        logger.info("Sent public key for %s to %s", user, instance.instance_id)
