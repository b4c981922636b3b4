# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Structured logging for the xero-identity adapter.

Example:
    >>> from xero_logging import create_logger
    >>> logger = create_logger(logger_type="stdout", level="INFO", name="xero_identity")
    >>> logger.info("Fetched authorized tenants", count=2)
"""

from .factory import create_logger
from .logger import Logger, mask_sensitive
from .silent_logger import SilentLogger
from .stdout_logger import StdoutLogger

__all__ = [
    "Logger",
    "SilentLogger",
    "StdoutLogger",
    "create_logger",
    "mask_sensitive",
]
