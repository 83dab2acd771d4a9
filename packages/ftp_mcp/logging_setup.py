"""Logging configuration for the FTP MCP server.

stdout carries the MCP stdio transport, so every handler writes to stderr.
Passwords and credentials embedded in FTP URLs are redacted before a record
is emitted.
"""

import logging
import re
import sys
from typing import Optional, Union


REDACTION_PATTERNS = [
    (re.compile(r'(password["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(passwd["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(PASS )\S+'), r'\1[REDACTED]'),
    (re.compile(r'(ftps?://)[^:/\s]+:[^@\s]+@'), r'\1[REDACTED]@'),
]


class RedactingFormatter(logging.Formatter):
    """Formatter that masks credentials in log messages."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for pattern, replacement in REDACTION_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        stream: Output stream (default sys.stderr)

    Returns:
        Configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("ftp_mcp")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(RedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)

    return logger
