"""Host name pattern resolution.

A pattern is a regular expression template with ``{name}``, ``{id}`` and
``{profile}`` placeholders, e.g. ``ec2.{name}`` or ``{profile}.{id}.aws``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from ec2_ssh_proxy.constants import HOST_PLACEHOLDER_REGEX, HOST_PLACEHOLDERS
from ec2_ssh_proxy.exceptions import (
    AmbiguousHostError,
    InvalidPatternError,
    UnresolvedHostError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostAttributes:
    """Attributes extracted from a ProxyCommand host token.

    Attributes
    ----------
    name : str | None
        Value to match against the instance ``Name`` tag
    id : str | None
        Literal EC2 instance id
    profile : str | None
        AWS credentials profile embedded in the host name
    """

    name: str | None = None
    id: str | None = None
    profile: str | None = None


def compile_host_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a host name pattern into a regular expression.

    Parameters
    ----------
    pattern : str
        Pattern template containing placeholders

    Returns
    -------
    re.Pattern[str]
        Compiled expression with one named group per placeholder

    Raises
    ------
    InvalidPatternError
        If the substituted template is not a valid regular expression
    """
    expression = pattern
    for placeholder in HOST_PLACEHOLDERS:
        expression = expression.replace(
            "{%s}" % placeholder, f"(?P<{placeholder}>{HOST_PLACEHOLDER_REGEX})"
        )

    try:
        return re.compile(expression)
    except re.error as e:
        logger.debug("Pattern %r compiled to invalid expression %r: %s", pattern, expression, e)
        raise InvalidPatternError(pattern) from e


def resolve_host(hostname: str, pattern: str) -> HostAttributes:
    """Extract host attributes from a host name.

    Parameters
    ----------
    hostname : str
        Host token passed by ssh (``%h``)
    pattern : str
        Host name pattern template

    Returns
    -------
    HostAttributes
        Extracted attributes with exactly one of ``name`` or ``id`` set

    Raises
    ------
    InvalidPatternError
        If the pattern does not compile
    AmbiguousHostError
        If both name and id were extracted
    UnresolvedHostError
        If neither name nor id was extracted
    """
    regex = compile_host_pattern(pattern)
    match = regex.search(hostname)
    groups = match.groupdict() if match else {}

    attributes = HostAttributes(
        name=groups.get("name") or None,
        id=groups.get("id") or None,
        profile=groups.get("profile") or None,
    )
    logger.debug("Resolved host %r with pattern %r: %s", hostname, pattern, attributes)

    if attributes.name and attributes.id:
        raise AmbiguousHostError("name and id could not be specified at same time")
    if not attributes.name and not attributes.id:
        raise UnresolvedHostError(
            f"neither name nor id is specified (host {hostname!r}, pattern {pattern!r})"
        )

    return attributes
