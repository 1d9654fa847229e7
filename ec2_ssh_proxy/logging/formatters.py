"""Logging formatters for stderr output."""

import logging

from ec2_ssh_proxy.constants import PROGRAM_NAME


class ProxyLogFormatter(logging.Formatter):
    """Logging formatter that prefixes the program name and warning levels."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with program and level prefix.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)

        if record.levelno >= logging.WARNING:
            return f"{PROGRAM_NAME}: {record.levelname.lower()}: {msg}"

        return f"{PROGRAM_NAME}: {msg}"
