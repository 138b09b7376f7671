"""
Structured logging with secret masking.

Provides the standard logger for all vectorsmith modules with:
- Structured output (timestamps, log levels, module names)
- Secret masking (API keys, bearer tokens, passwords, URL credentials)
- LOG_LEVEL environment override
- File and console output support
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Optional


# Patterns for secret masking
SECRET_PATTERNS = [
    (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)([^"\'\s,]+)(["\']?)', re.IGNORECASE), r'\1***REDACTED***\3'),
    (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'\s,]+)(["\']?)', re.IGNORECASE), r'\1***REDACTED***\3'),
    (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\'\s,]+)(["\']?)', re.IGNORECASE), r'\1***REDACTED***\3'),
    (re.compile(r'(secret["\']?\s*[:=]\s*["\']?)([^"\'\s,]+)(["\']?)', re.IGNORECASE), r'\1***REDACTED***\3'),
    (re.compile(r'(bearer\s+)([A-Za-z0-9._\-]+)', re.IGNORECASE), r'\1***REDACTED***'),
    # redis://:pw@host, postgresql://user:pw@host
    (re.compile(r'([a-z][a-z0-9+.\-]*://[^:/@\s]*:)([^@\s]+)(@)', re.IGNORECASE), r'\1***REDACTED***\3'),
]


def mask_secrets(message: str) -> str:
    """Apply every secret masking pattern to a message."""
    for pattern, replacement in SECRET_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SecretMaskingFormatter(logging.Formatter):
    """
    Logging formatter that masks secrets in log messages.

    Redacts API keys, bearer tokens, passwords and credentials embedded in
    connection URLs.
    """

    def format(self, record: logging.LogRecord) -> str:
        return mask_secrets(super().format(record))


def setup_logger(
    name: str = "vectorsmith",
    level: str = "INFO",
    log_file: Optional[Path] = None,
    mask_secrets: bool = True
) -> logging.Logger:
    """
    Set up a structured logger with optional secret masking.

    Args:
        name: Logger name (typically module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        mask_secrets: Enable secret masking in log messages

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("vectorsmith.storage", level="DEBUG")
        >>> logger.info("Connecting to redis://:hunter2@localhost:6379")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if mask_secrets:
        formatter = SecretMaskingFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with default configuration.

    Uses environment variable LOG_LEVEL if set.

    Example:
        >>> from vectorsmith.utils.logger import get_logger
        >>> logger = get_logger(__name__)
    """
    level = os.getenv("LOG_LEVEL", "INFO")
    return setup_logger(name, level=level)


# Module-level logger for vectorsmith
logger = get_logger("vectorsmith")


__all__ = ["setup_logger", "get_logger", "logger", "mask_secrets", "SecretMaskingFormatter"]
