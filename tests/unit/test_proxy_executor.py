"""Tests for the proxy pipeline orchestration."""

import logging

import pytest
from botocore.exceptions import ClientError

from ec2_ssh_proxy.core.config import ProxyParameters
from ec2_ssh_proxy.core.proxy_executor import ProxyExecutor, default_clients_factory
from ec2_ssh_proxy.exceptions import (
    InstanceNotFoundError,
    PluginNotFoundError,
    RemoteError,
    TransportError,
)

from fakes import PUBLIC_KEY, RecordingPlugin


@pytest.fixture
def params() -> ProxyParameters:
    return ProxyParameters(
        profile="prod",
        user="ubuntu",
        port=22,
        public_key=PUBLIC_KEY,
        name="web",
        region="us-east-1",
    )


def test_pipeline_runs_all_stages_in_order(
    params, clients_factory, mock_clients, recording_plugin
) -> None:
    ProxyExecutor(clients_factory, recording_plugin).execute(params)

    clients_factory.assert_called_once_with(profile="prod", region="us-east-1")
    mock_clients.ec2.describe_instances.assert_called_once_with(
        Filters=[{"Name": "tag:Name", "Values": ["web"]}]
    )
    mock_clients.instance_connect.send_ssh_public_key.assert_called_once_with(
        AvailabilityZone="us-east-1a",
        InstanceId="i-0123456789abcdef0",
        InstanceOSUser="ubuntu",
        SSHPublicKey=PUBLIC_KEY,
    )
    mock_clients.ssm.start_session.assert_called_once()
    mock_clients.ssm.terminate_session.assert_not_called()

    assert recording_plugin.check_calls == 1
    [(handle, profile)] = recording_plugin.started
    assert handle.session_id == "user-0a1b2c3d4e5f"
    assert handle.request["Target"] == "i-0123456789abcdef0"
    assert profile == "prod"


def test_instance_not_found_stops_pipeline(
    params, clients_factory, mock_clients, recording_plugin
) -> None:
    mock_clients.ec2.describe_instances.return_value = {"Reservations": []}

    with pytest.raises(InstanceNotFoundError):
        ProxyExecutor(clients_factory, recording_plugin).execute(params)

    mock_clients.instance_connect.send_ssh_public_key.assert_not_called()
    mock_clients.ssm.start_session.assert_not_called()
    assert recording_plugin.started == []


def test_key_push_failure_stops_pipeline(
    params, clients_factory, mock_clients, recording_plugin
) -> None:
    mock_clients.instance_connect.send_ssh_public_key.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
        "SendSSHPublicKey",
    )

    with pytest.raises(RemoteError):
        ProxyExecutor(clients_factory, recording_plugin).execute(params)

    mock_clients.ssm.start_session.assert_not_called()


def test_missing_plugin_never_starts_session(params, clients_factory, mock_clients) -> None:
    plugin = RecordingPlugin(available=False)

    with pytest.raises(PluginNotFoundError):
        ProxyExecutor(clients_factory, plugin).execute(params)

    mock_clients.ssm.start_session.assert_not_called()
    mock_clients.ssm.terminate_session.assert_not_called()
    assert plugin.started == []


def test_plugin_vanishing_after_start_terminates_session_once(
    params, clients_factory, mock_clients
) -> None:
    plugin = RecordingPlugin(missing_on_start=True)

    with pytest.raises(PluginNotFoundError):
        ProxyExecutor(clients_factory, plugin).execute(params)

    mock_clients.ssm.terminate_session.assert_called_once_with(SessionId="user-0a1b2c3d4e5f")


def test_failed_termination_is_logged_and_original_error_kept(
    params, clients_factory, mock_clients, caplog
) -> None:
    mock_clients.ssm.terminate_session.side_effect = ClientError(
        {"Error": {"Code": "InternalServerError", "Message": "boom"}},
        "TerminateSession",
    )
    plugin = RecordingPlugin(missing_on_start=True)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(PluginNotFoundError):
            ProxyExecutor(clients_factory, plugin).execute(params)

    assert "Failed to terminate session user-0a1b2c3d4e5f" in caplog.text
    mock_clients.ssm.terminate_session.assert_called_once()


def test_transport_error_does_not_terminate_session(
    params, clients_factory, mock_clients
) -> None:
    plugin = RecordingPlugin(start_error=TransportError(1))

    with pytest.raises(TransportError):
        ProxyExecutor(clients_factory, plugin).execute(params)

    mock_clients.ssm.terminate_session.assert_not_called()


def test_default_clients_factory_uses_session_factory() -> None:
    created = []

    class FakeSession:
        def __init__(self, profile_name=None, region_name=None):
            created.append((profile_name, region_name))

        def client(self, service_name):
            return service_name

    clients = default_clients_factory(FakeSession)(profile="dev", region="eu-west-1")

    assert created == [("dev", "eu-west-1")]
    assert clients.ec2 == "ec2"
    assert clients.instance_connect == "ec2-instance-connect"
    assert clients.ssm == "ssm"
