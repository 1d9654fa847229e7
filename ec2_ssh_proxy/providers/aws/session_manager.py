"""Systems Manager session lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ec2_ssh_proxy.constants import SESSION_PORT_PARAMETER, SSH_SESSION_DOCUMENT
from ec2_ssh_proxy.providers.aws.errors import handle_aws_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionHandle:
    """Started SSM session as handed to the session transport.

    Attributes
    ----------
    session_id : str
        SSM session id
    token_value : str
        Token authenticating the transport stream
    stream_url : str
        WebSocket URL of the transport stream
    signing_region : str
        Region the SSM client signs requests for
    endpoint : str
        SSM endpoint URL
    request : dict[str, Any]
        StartSession request parameters
    response : dict[str, Any]
        StartSession response
    """

    session_id: str
    token_value: str
    stream_url: str
    signing_region: str
    endpoint: str
    request: dict[str, Any] = field(default_factory=dict)
    response: dict[str, Any] = field(default_factory=dict)


class SessionManager:
    """Start and terminate SSH port-forwarding sessions."""

    def __init__(self, ssm_client: Any) -> None:
        """Initialize session manager.

        Parameters
        ----------
        ssm_client : Any
            boto3 SSM client; its region and endpoint are passed to the plugin
        """
        self.ssm_client = ssm_client

    @property
    def signing_region(self) -> str:
        return self.ssm_client.meta.region_name

    @property
    def endpoint(self) -> str:
        return self.ssm_client.meta.endpoint_url

    def start_session(self, instance_id: str, port: int) -> SessionHandle:
        """Start an AWS-StartSSHSession session targeting the instance.

        Parameters
        ----------
        instance_id : str
            Target instance id
        port : int
            Remote port to forward

        Returns
        -------
        SessionHandle
            Session details for the transport plugin

        Raises
        ------
        RemoteError
            If the StartSession call fails
        """
        request = {
            "Target": instance_id,
            "DocumentName": SSH_SESSION_DOCUMENT,
            "Parameters": {SESSION_PORT_PARAMETER: [str(port)]},
        }

        with handle_aws_errors():
            response = self.ssm_client.start_session(**request)

        handle = SessionHandle(
            session_id=response["SessionId"],
            token_value=response.get("TokenValue", ""),
            stream_url=response.get("StreamUrl", ""),
            signing_region=self.signing_region,
            endpoint=self.endpoint,
            request=request,
            response=response,
        )
        logger.info("Started session %s for %s:%d", handle.session_id, instance_id, port)
        return handle

    def terminate_session(self, session_id: str) -> None:
        """Terminate a session.

        Parameters
        ----------
        session_id : str
            SSM session id

        Raises
        ------
        RemoteError
            If the TerminateSession call fails
        """
        with handle_aws_errors():
            self.ssm_client.terminate_session(SessionId=session_id)
        logger.info("Terminated session %s", session_id)
