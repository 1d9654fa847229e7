"""Exception hierarchy for ec2-ssh-proxy.

Every failure in the pipeline is terminal for the run. The CLI catches
:class:`ProxyError` and reports the message on stderr.
"""

from __future__ import annotations


class ProxyError(Exception):
    """Base class for all ec2-ssh-proxy errors."""


class ConfigError(ProxyError):
    """Invalid arguments, configuration file or unreadable public key."""


class HostPatternError(ProxyError):
    """Host name could not be resolved with the configured pattern."""


class InvalidPatternError(HostPatternError):
    """Host name pattern does not compile as a regular expression.

    Parameters
    ----------
    pattern : str
        The pattern as given by the user, before placeholder substitution
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid host name pattern: {pattern}")


class AmbiguousHostError(HostPatternError):
    """Host name yielded both an instance name and an instance id."""


class UnresolvedHostError(HostPatternError):
    """Host name yielded neither an instance name nor an instance id."""


class InstanceNotFoundError(ProxyError):
    """No EC2 instance matched the name filter or instance id."""


class PluginNotFoundError(ProxyError):
    """The session-manager-plugin executable is not on PATH."""


class RemoteError(ProxyError):
    """An AWS API call failed.

    Parameters
    ----------
    message : str
        Human readable description of the failure
    error_code : str | None
        AWS error code (e.g. ``AccessDeniedException``) when one is available
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class CredentialsError(RemoteError):
    """AWS credentials could not be located."""


class TransportError(ProxyError):
    """The session-manager-plugin process failed.

    Parameters
    ----------
    returncode : int
        Exit status of the plugin process
    """

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"session-manager-plugin exited with status {returncode}")
