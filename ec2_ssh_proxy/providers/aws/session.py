"""boto3 session and client construction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3

from ec2_ssh_proxy.providers.aws.errors import handle_aws_errors

logger = logging.getLogger(__name__)


class AWSClients:
    """EC2, EC2 Instance Connect and SSM clients sharing one boto3 session.

    Parameters
    ----------
    profile : str | None
        Shared credentials profile, None for the default credential chain
    region : str | None
        Region override, None for the profile default
    boto3_session_factory : Callable[..., Any] | None
        Optional factory for creating boto3 sessions. If None, uses boto3.Session
    """

    def __init__(
        self,
        profile: str | None = None,
        region: str | None = None,
        boto3_session_factory: Callable[..., Any] | None = None,
    ) -> None:
        session_factory = boto3_session_factory or boto3.Session
        logger.debug("Creating AWS session (profile=%s, region=%s)", profile, region)

        with handle_aws_errors():
            self.session = session_factory(profile_name=profile, region_name=region)
            self.ec2 = self.session.client("ec2")
            self.instance_connect = self.session.client("ec2-instance-connect")
            self.ssm = self.session.client("ssm")
