"""Tests for SSM session start and termination."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ec2_ssh_proxy.exceptions import RemoteError
from ec2_ssh_proxy.providers.aws.session_manager import SessionManager


def test_start_session_request(mock_clients) -> None:
    manager = SessionManager(mock_clients.ssm)

    handle = manager.start_session("i-0123456789abcdef0", 22)

    mock_clients.ssm.start_session.assert_called_once_with(
        Target="i-0123456789abcdef0",
        DocumentName="AWS-StartSSHSession",
        Parameters={"portNumber": ["22"]},
    )
    assert handle.request == {
        "Target": "i-0123456789abcdef0",
        "DocumentName": "AWS-StartSSHSession",
        "Parameters": {"portNumber": ["22"]},
    }


def test_start_session_handle(mock_clients) -> None:
    handle = SessionManager(mock_clients.ssm).start_session("i-0123456789abcdef0", 2222)

    assert handle.session_id == "user-0a1b2c3d4e5f"
    assert handle.token_value == "token"
    assert handle.stream_url.startswith("wss://ssmmessages.us-east-1.amazonaws.com/")
    assert handle.signing_region == "us-east-1"
    assert handle.endpoint == "https://ssm.us-east-1.amazonaws.com"
    assert handle.response == mock_clients.ssm.start_session.return_value
    assert handle.request["Parameters"] == {"portNumber": ["2222"]}


def test_start_session_error() -> None:
    ssm = MagicMock()
    ssm.start_session.side_effect = ClientError(
        {"Error": {"Code": "TargetNotConnected", "Message": "i-1 is not connected."}},
        "StartSession",
    )

    with pytest.raises(RemoteError) as exc_info:
        SessionManager(ssm).start_session("i-1", 22)

    assert exc_info.value.error_code == "TargetNotConnected"


def test_terminate_session(mock_clients) -> None:
    SessionManager(mock_clients.ssm).terminate_session("user-0a1b2c3d4e5f")

    mock_clients.ssm.terminate_session.assert_called_once_with(SessionId="user-0a1b2c3d4e5f")
