"""Global constants for ec2-ssh-proxy.

This module contains the built-in defaults and the fixed identifiers shared by
the CLI, the configuration layer and the AWS providers.
"""

PROGRAM_NAME = "ec2-ssh-proxy"
"""Name used in log prefixes and user-facing messages."""

DEFAULT_HOST_PATTERN = "ec2.{name}"
"""Default host name pattern.

Matches ProxyCommand host tokens such as ``ec2.my-instance`` and resolves them
by the instance ``Name`` tag.
"""

DEFAULT_OS_USER = "ec2-user"
"""Default OS user the public key is authorized for on the instance."""

DEFAULT_PUBLIC_KEY_FILE = "~/.ssh/id_rsa.pub"
"""Default SSH public key file pushed through EC2 Instance Connect."""

HOST_PLACEHOLDERS = ("name", "id", "profile")
"""Placeholders recognised in host name patterns, written as ``{name}``."""

HOST_PLACEHOLDER_REGEX = r"[\w-]+"
"""Expression each placeholder is replaced with inside its named group."""

SSH_SESSION_DOCUMENT = "AWS-StartSSHSession"
"""SSM document that opens an SSH port-forwarding session."""

SESSION_PORT_PARAMETER = "portNumber"
"""Name of the SSM document parameter carrying the remote port."""

SESSION_MANAGER_PLUGIN = "session-manager-plugin"
"""Executable implementing the Session Manager transport."""

SESSION_MANAGER_OPERATION = "StartSession"
"""Operation name passed to the plugin as its third positional argument."""

SESSION_MANAGER_PLUGIN_NOT_FOUND = (
    "SessionManagerPlugin is not found.\n"
    "Please refer to SessionManager Documentation here:\n"
    "http://docs.aws.amazon.com/console/systems-manager/"
    "session-manager-plugin-not-found"
)
"""Message reported when the plugin executable is missing from PATH."""

MIN_VALID_PORT = 1
"""Lowest valid TCP port number."""

MAX_VALID_PORT = 65535
"""Highest valid TCP port number."""

CONFIG_ENV_VAR = "EC2_SSH_PROXY_CONFIG"
"""Environment variable naming an optional YAML configuration file."""

DEBUG_ENV_VAR = "EC2_SSH_PROXY_DEBUG"
"""Environment variable that makes the CLI re-raise errors with tracebacks."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating any pipeline failure."""
