"""CLI entry point for ec2-ssh-proxy."""

from __future__ import annotations

import os
import sys

import fire

from ec2_ssh_proxy.constants import DEBUG_ENV_VAR, EXIT_ERROR, PROGRAM_NAME
from ec2_ssh_proxy.exceptions import (
    CredentialsError,
    ProxyError,
    RemoteError,
)
from ec2_ssh_proxy.logging import configure_logging
from ec2_ssh_proxy.providers.aws.utils import get_aws_credentials_error_message


def get_proxy_class() -> type:
    """Get EC2SSHProxy class on-demand to avoid circular imports.

    Returns
    -------
    type
        EC2SSHProxy class
    """
    from ec2_ssh_proxy.__main__ import EC2SSHProxy

    return EC2SSHProxy


def handle_credentials_error(debug_mode: bool) -> None:
    """Handle missing AWS credentials.

    Parameters
    ----------
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    CredentialsError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(get_aws_credentials_error_message(), file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_remote_error(error: RemoteError, debug_mode: bool) -> None:
    """Handle AWS API error with context-specific messages.

    Parameters
    ----------
    error : RemoteError
        The API error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    RemoteError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    error_code = error.error_code

    if error_code in ["UnauthorizedOperation", "AccessDeniedException", "AccessDenied"]:
        print("Insufficient IAM permissions\n", file=sys.stderr)
        print(f"{error}\n", file=sys.stderr)
        print("Your AWS credentials need:", file=sys.stderr)
        print("  - ec2:DescribeInstances", file=sys.stderr)
        print("  - ec2-instance-connect:SendSSHPublicKey", file=sys.stderr)
        print("  - ssm:StartSession, ssm:TerminateSession", file=sys.stderr)
    elif error_code in ["ExpiredToken", "RequestExpired", "ExpiredTokenException"]:
        print("AWS credentials have expired\n", file=sys.stderr)
        print("Fix it:", file=sys.stderr)
        print("  aws sso login           # If using AWS SSO", file=sys.stderr)
        print("  aws configure           # Re-configure credentials", file=sys.stderr)
    elif error_code == "TargetNotConnected":
        print(f"{error}\n", file=sys.stderr)
        print("The instance is not registered with Systems Manager.", file=sys.stderr)
        print("Check that the SSM agent is running and the instance profile", file=sys.stderr)
        print("allows AmazonSSMManagedInstanceCore.", file=sys.stderr)
    else:
        print(str(error), file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_proxy_error(error: ProxyError, debug_mode: bool) -> None:
    """Report any other pipeline error.

    Parameters
    ----------
    error : ProxyError
        The error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProxyError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(str(error), file=sys.stderr)
    sys.exit(EXIT_ERROR)


def main() -> None:
    """Entry point for the fire CLI with graceful error handling.

    Every failure prints a message on stderr and exits with status 1,
    including argument errors reported by fire.
    Set EC2_SSH_PROXY_DEBUG=1 to get the traceback instead.
    """
    configure_logging()

    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"

    try:
        fire.Fire(get_proxy_class()().proxy, name=PROGRAM_NAME)
    except SystemExit as e:
        if e.code not in (None, 0):
            sys.exit(EXIT_ERROR)
        raise
    except CredentialsError:
        handle_credentials_error(debug_mode)
    except RemoteError as e:
        handle_remote_error(e, debug_mode)
    except ProxyError as e:
        handle_proxy_error(e, debug_mode)
