"""AWS clients for instance lookup, key authorization and SSM sessions."""

from ec2_ssh_proxy.providers.aws.compute import EC2Manager, InstanceRef
from ec2_ssh_proxy.providers.aws.instance_connect import InstanceConnectManager
from ec2_ssh_proxy.providers.aws.session import AWSClients
from ec2_ssh_proxy.providers.aws.session_manager import SessionHandle, SessionManager

__all__ = [
    "AWSClients",
    "EC2Manager",
    "InstanceConnectManager",
    "InstanceRef",
    "SessionHandle",
    "SessionManager",
]
