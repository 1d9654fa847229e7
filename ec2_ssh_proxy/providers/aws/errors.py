"""Translation of botocore exceptions into ec2-ssh-proxy errors."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    ProfileNotFound,
)

from ec2_ssh_proxy.exceptions import ConfigError, CredentialsError, RemoteError

logger = logging.getLogger(__name__)


@contextmanager
def handle_aws_errors() -> Generator[None, None, None]:
    """Re-raise botocore failures as :class:`RemoteError` and friends.

    Yields
    ------
    None
        Control back to the block issuing AWS calls

    Raises
    ------
    CredentialsError
        If credentials are missing or incomplete
    ConfigError
        If the named AWS profile does not exist
    RemoteError
        For any other API or transport failure, with the AWS error code kept
    """
    try:
        yield
    except (NoCredentialsError, PartialCredentialsError) as e:
        raise CredentialsError(str(e), error_code="NoCredentials") from e
    except ProfileNotFound as e:
        raise ConfigError(str(e)) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        error_code = error.get("Code")
        logger.debug("AWS API error %s: %s", error_code, error.get("Message"))
        raise RemoteError(str(e), error_code=error_code) from e
    except BotoCoreError as e:
        raise RemoteError(str(e)) from e
