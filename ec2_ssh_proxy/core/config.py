"""Configuration loading and parameter assembly."""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ec2_ssh_proxy.cli.parsing import parse_port
from ec2_ssh_proxy.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_HOST_PATTERN,
    DEFAULT_OS_USER,
    DEFAULT_PUBLIC_KEY_FILE,
)
from ec2_ssh_proxy.core.host_pattern import resolve_host
from ec2_ssh_proxy.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("pattern", "user", "public_key", "profile", "region")


@dataclass(frozen=True)
class ProxyParameters:
    """Immutable parameter set for a single proxy run.

    Attributes
    ----------
    profile : str | None
        AWS credentials profile, None for the boto3 default chain
    user : str
        OS user the public key is authorized for
    port : int
        Remote port forwarded by the SSM session
    public_key : str
        Public key file contents
    id : str | None
        EC2 instance id filter
    name : str | None
        EC2 ``Name`` tag filter
    region : str | None
        AWS region, None for the profile default
    """

    profile: str | None
    user: str
    port: int
    public_key: str
    id: str | None = None
    name: str | None = None
    region: str | None = None


class ConfigLoader:
    """Load configuration and assemble proxy parameters."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS: dict[str, Any] = {
            "pattern": DEFAULT_HOST_PATTERN,
            "user": DEFAULT_OS_USER,
            "public_key": DEFAULT_PUBLIC_KEY_FILE,
            "profile": None,
            "region": None,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from a YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, uses the file named by the
            EC2_SSH_PROXY_CONFIG environment variable; if that is unset too,
            no file is read

        Returns
        -------
        dict[str, Any]
            Parsed configuration with all variable interpolations resolved

        Raises
        ------
        ConfigError
            If the file cannot be read, is not valid YAML or fails to resolve
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR)

        if not config_path:
            return {}

        config_file = Path(config_path).expanduser()

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise ConfigError(f"Failed to read config file {config_file}: {e}") from e

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except OmegaConfBaseException as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ConfigError(f"Configuration variable resolution error: {e}") from e

        if config is None:
            return {}

        if not isinstance(config, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")

        return config

    def get_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge file configuration over the built-in defaults.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded from file

        Returns
        -------
        dict[str, Any]
            Merged configuration
        """
        self.validate_config(config)

        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)
        for key, value in config.items():
            if value is not None:
                merged[key] = value

        return merged

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate configuration has known keys and string values.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ConfigError
            If configuration is invalid
        """
        unknown = sorted(str(key) for key in config if key not in CONFIG_KEYS)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {unknown}. Valid keys: {list(CONFIG_KEYS)}"
            )

        for key, value in config.items():
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{key} must be a string")

    def read_public_key(self, key_file: str) -> str:
        """Read an SSH public key file.

        Parameters
        ----------
        key_file : str
            Path to the public key; a leading ``~`` is expanded

        Returns
        -------
        str
            File contents

        Raises
        ------
        ConfigError
            If the home directory cannot be determined, or the file cannot be
            read or is empty
        """
        try:
            path = Path(key_file).expanduser()
        except RuntimeError as e:
            raise ConfigError(f"Cannot expand public key path {key_file}: {e}") from e

        try:
            public_key = path.read_text()
        except OSError as e:
            raise ConfigError(f"Failed to read public key file {path}: {e}") from e

        if not public_key.strip():
            raise ConfigError(f"Public key file {path} is empty")

        logger.debug("Read public key from %s", path)
        return public_key

    def build_parameters(
        self, host: str, port: str | int, config: dict[str, Any]
    ) -> ProxyParameters:
        """Assemble the parameter set for a proxy run.

        Parameters
        ----------
        host : str
            Host token passed by ssh
        port : str | int
            Port passed by ssh
        config : dict[str, Any]
            Merged configuration including CLI overrides

        Returns
        -------
        ProxyParameters
            Parameters for the run

        Raises
        ------
        ConfigError
            If the port or public key file is invalid
        HostPatternError
            If the host name cannot be resolved with the pattern
        """
        port_number = parse_port(port)
        public_key = self.read_public_key(config["public_key"])
        attributes = resolve_host(host, config["pattern"])

        if config.get("profile_explicit"):
            profile = config["profile"]
        else:
            profile = attributes.profile or config.get("profile")

        return ProxyParameters(
            profile=profile,
            user=config["user"],
            port=port_number,
            public_key=public_key,
            id=attributes.id,
            name=attributes.name,
            region=config.get("region"),
        )
