# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Structured logger interface and credential masking."""

from abc import ABC, abstractmethod
from typing import Any

# Structured field names whose values must never reach log output.
SENSITIVE_FIELDS = frozenset(
    {
        "access_token",
        "refresh_token",
        "id_token",
        "client_secret",
        "authorization",
        "code",
    }
)

MASK = "***"


def mask_sensitive(fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``fields`` with credential values masked.

    Args:
        fields: Structured data passed to a log call

    Returns:
        Dictionary safe to serialize into log output
    """
    return {
        key: (MASK if key.lower() in SENSITIVE_FIELDS and value else value)
        for key, value in fields.items()
    }


class Logger(ABC):
    """Structured logger used by the identity adapter.

    Every call takes a human-readable message plus keyword fields
    (``provider``, ``step``, ``tenant_id``, ``status_code``, ...) that are
    emitted as JSON keys next to the message. Implementations pass the
    fields through ``mask_sensitive`` before they leave the process, so
    callers may hand over a token-bearing field without leaking it.
    """

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Record a completed step, such as a resolved identity."""

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Record an upstream rejection that is raised to the caller.

        Args:
            message: What the provider answered and during which step
            **kwargs: Fields describing the rejection, e.g. ``status_code``
        """

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Record a call that failed before Xero answered."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Record request-level detail (URLs, tenant counts)."""

    @abstractmethod
    def exception(self, message: str, **kwargs: Any) -> None:
        """Record an error together with the exception being handled.

        Must be called from inside an ``except`` block; loggers that write
        output attach the traceback to the entry.
        """
