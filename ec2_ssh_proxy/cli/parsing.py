"""CLI argument parsing and parameter conversion utilities."""

from __future__ import annotations

from typing import Any

from ec2_ssh_proxy.constants import MAX_VALID_PORT, MIN_VALID_PORT
from ec2_ssh_proxy.exceptions import ConfigError


def parse_port(port: str | int) -> int:
    """Parse port argument into an integer with validation.

    Parameters
    ----------
    port : str | int
        Port as passed by ssh (``%p``); fire may already have converted it

    Returns
    -------
    int
        Port number

    Raises
    ------
    ConfigError
        If the value is not numeric or outside valid range (1-65535)
    """
    if isinstance(port, bool):
        raise ConfigError(f"Invalid port value: {port!r} is not numeric")

    if isinstance(port, int):
        value = port
    else:
        port_str = str(port).strip()
        try:
            value = int(port_str)
        except ValueError:
            raise ConfigError(f"Invalid port value: '{port_str}' is not numeric") from None

    if value < MIN_VALID_PORT or value > MAX_VALID_PORT:
        raise ConfigError(
            f"Invalid port value: {value}. Port must be between "
            f"{MIN_VALID_PORT} and {MAX_VALID_PORT}"
        )

    return value


def apply_cli_overrides(
    config: dict[str, Any],
    pattern: str | None,
    profile: str | None,
    public_key: str | None,
    user: str | None,
    region: str | None,
) -> None:
    """Apply CLI option overrides to merged configuration.

    Parameters
    ----------
    config : dict[str, Any]
        Configuration dictionary to modify in-place
    pattern : str | None
        Host name pattern
    profile : str | None
        AWS credentials profile; recorded as explicit so that it wins over a
        profile extracted from the host name
    public_key : str | None
        SSH public key file path
    user : str | None
        OS user on the instance
    region : str | None
        AWS region
    """
    if pattern is not None:
        config["pattern"] = pattern

    if profile is not None:
        config["profile"] = profile
        config["profile_explicit"] = True

    if public_key is not None:
        config["public_key"] = public_key

    if user is not None:
        config["user"] = user

    if region is not None:
        config["region"] = region


__all__ = [
    "parse_port",
    "apply_cli_overrides",
]
