"""Pytest configuration and fixtures for ec2-ssh-proxy tests."""

import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

unit_root = Path(__file__).parent
if str(unit_root) not in sys.path:
    sys.path.insert(0, str(unit_root))

from fakes import PUBLIC_KEY, RecordingPlugin  # noqa: E402


@pytest.fixture(autouse=True)
def clean_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure ec2-ssh-proxy environment variables do not leak into tests.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture
    """
    monkeypatch.delenv("EC2_SSH_PROXY_CONFIG", raising=False)
    monkeypatch.delenv("EC2_SSH_PROXY_DEBUG", raising=False)


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    names = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_DEFAULT_REGION")
    old_values = {name: os.environ.get(name) for name in names}

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

    yield

    for name, value in old_values.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


@pytest.fixture
def public_key_file(tmp_path: Path) -> Path:
    """Write an SSH public key to a temporary file.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path

    Returns
    -------
    Path
        Path to the public key file
    """
    key_file = tmp_path / "id_rsa.pub"
    key_file.write_text(PUBLIC_KEY)
    return key_file


@pytest.fixture
def recording_plugin() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def mock_clients() -> MagicMock:
    """Return AWS clients whose calls succeed for a single running instance.

    Returns
    -------
    MagicMock
        Object with ``ec2``, ``instance_connect`` and ``ssm`` client mocks
    """
    clients = MagicMock()
    clients.ec2.describe_instances.return_value = {
        "Reservations": [
            {
                "Instances": [
                    {
                        "InstanceId": "i-0123456789abcdef0",
                        "Placement": {"AvailabilityZone": "us-east-1a"},
                    }
                ]
            }
        ]
    }
    clients.instance_connect.send_ssh_public_key.return_value = {
        "RequestId": "req-1",
        "Success": True,
    }
    clients.ssm.meta.region_name = "us-east-1"
    clients.ssm.meta.endpoint_url = "https://ssm.us-east-1.amazonaws.com"
    clients.ssm.start_session.return_value = {
        "SessionId": "user-0a1b2c3d4e5f",
        "TokenValue": "token",
        "StreamUrl": "wss://ssmmessages.us-east-1.amazonaws.com/v1/data-channel/user-0a1b2c3d4e5f",
    }
    return clients


@pytest.fixture
def clients_factory(mock_clients: MagicMock) -> Any:
    """Return a clients factory that records its keyword arguments."""
    factory = MagicMock(return_value=mock_clients)
    return factory
