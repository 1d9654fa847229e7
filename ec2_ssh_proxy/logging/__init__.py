"""Logging setup for ec2-ssh-proxy.

stdout carries the SSH stream, so all log output goes to stderr.
"""

import logging
import sys

from ec2_ssh_proxy.logging.formatters import ProxyLogFormatter

QUIET_LOGGERS = ("botocore", "boto3", "urllib3")


def configure_logging(verbose: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    Parameters
    ----------
    verbose : bool
        Log at DEBUG instead of WARNING
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ProxyLogFormatter("%(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[stderr_handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["ProxyLogFormatter", "configure_logging"]
