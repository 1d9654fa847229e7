"""AWS-specific utility functions for ec2-ssh-proxy."""

from __future__ import annotations

from typing import Any

from ec2_ssh_proxy.exceptions import InstanceNotFoundError


def extract_instance_from_response(response: dict[str, Any]) -> dict[str, Any]:
    """Extract first instance from AWS describe_instances response.

    Parameters
    ----------
    response : dict[str, Any]
        Response from boto3 describe_instances call

    Returns
    -------
    dict[str, Any]
        The first instance dictionary, in the order returned by the API

    Raises
    ------
    InstanceNotFoundError
        If response has no reservations or instances
    """
    reservations = response.get("Reservations") or []
    if not reservations or not reservations[0].get("Instances"):
        raise InstanceNotFoundError("ec2 instance is not found")
    return reservations[0]["Instances"][0]


def get_aws_credentials_error_message() -> str:
    """Get standard AWS credentials error message.

    Returns
    -------
    str
        Formatted AWS credentials error message
    """
    return (
        "AWS credentials not found\n\n"
        "Configure your credentials:\n"
        "  aws configure\n\n"
        "Or select a profile:\n"
        "  ProxyCommand ec2-ssh-proxy --profile=NAME %h %p\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=..."
    )
