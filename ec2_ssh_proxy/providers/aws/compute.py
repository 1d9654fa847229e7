"""EC2 instance lookup for ec2-ssh-proxy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ec2_ssh_proxy.providers.aws.errors import handle_aws_errors
from ec2_ssh_proxy.providers.aws.utils import extract_instance_from_response

if TYPE_CHECKING:
    from ec2_ssh_proxy.core.config import ProxyParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstanceRef:
    """Located EC2 instance.

    Attributes
    ----------
    instance_id : str
        EC2 instance id
    availability_zone : str
        Availability zone the instance is placed in
    """

    instance_id: str
    availability_zone: str


class EC2Manager:
    """Resolve EC2 instances from host attributes."""

    def __init__(self, ec2_client: Any) -> None:
        """Initialize EC2 manager.

        Parameters
        ----------
        ec2_client : Any
            boto3 EC2 client
        """
        self.ec2_client = ec2_client

    def build_describe_request(self, params: ProxyParameters) -> dict[str, Any]:
        """Build describe_instances keyword arguments for the name or id filter.

        Parameters
        ----------
        params : ProxyParameters
            Parameters carrying exactly one of name or id

        Returns
        -------
        dict[str, Any]
            Keyword arguments for describe_instances
        """
        request: dict[str, Any] = {}
        if params.name:
            request["Filters"] = [{"Name": "tag:Name", "Values": [params.name]}]
        if params.id:
            request["InstanceIds"] = [params.id]
        return request

    def find_instance(self, params: ProxyParameters) -> InstanceRef:
        """Find the instance matching the name tag or instance id.

        When several instances share a name tag the first one returned by the
        API is used.

        Parameters
        ----------
        params : ProxyParameters
            Parameters carrying exactly one of name or id

        Returns
        -------
        InstanceRef
            Instance id and availability zone

        Raises
        ------
        InstanceNotFoundError
            If no instance matches
        RemoteError
            If the describe_instances call fails
        """
        request = self.build_describe_request(params)
        logger.debug("Describing instances with %s", request)

        with handle_aws_errors():
            response = self.ec2_client.describe_instances(**request)

        instance = extract_instance_from_response(response)
        ref = InstanceRef(
            instance_id=instance["InstanceId"],
            availability_zone=instance.get("Placement", {}).get("AvailabilityZone", ""),
        )
        logger.info("Found instance %s in %s", ref.instance_id, ref.availability_zone)
        return ref
