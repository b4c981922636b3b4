# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Exception hierarchy for the Xero identity adapter.

Two families mirror who is at fault:

- ``AuthenticationError``: the flow is missing something it needs (no
  authorization URL yet, no access token, no authorized tenants, no
  organisations, unreadable persisted session).
- ``ProviderError``: the upstream service could not be reached, answered
  with an unexpected status, or sent a body that could not be decoded.

Nothing in the adapter retries or recovers; every error propagates to the
caller as raised.
"""

from typing import Optional


class IdentityError(Exception):
    """Base class for all adapter errors.

    Attributes:
        provider: Name of the provider that raised the error, if known
        step: Short label for the failing step (e.g. "fetch authorized tenants")
    """

    def __init__(self, message: str, provider: Optional[str] = None, step: Optional[str] = None):
        super().__init__(message)
        self.provider = provider
        self.step = step


class AuthenticationError(IdentityError):
    """Raised when authentication cannot proceed with the data at hand."""
    pass


class ProviderError(IdentityError):
    """Raised when the identity provider service is unavailable or misbehaves."""
    pass


class NoAuthURLError(AuthenticationError):
    """Raised when a session has no authorization URL yet."""
    pass


class NoAccessTokenError(AuthenticationError):
    """Raised when identity resolution is attempted without an access token."""
    pass


class NoAuthorizedTenantsError(AuthenticationError):
    """Raised when the user granted access to no tenants."""
    pass


class NoOrganizationsError(AuthenticationError):
    """Raised when the organisation profile lists no organisations."""
    pass


class DeserializeError(AuthenticationError):
    """Raised when persisted session text cannot be parsed."""
    pass


class TransportError(ProviderError):
    """Raised when a request fails before a response is received."""
    pass


class UpstreamStatusError(ProviderError):
    """Raised when the provider answers with an unexpected HTTP status.

    Attributes:
        status_code: HTTP status code of the response
        body: Response body text, for diagnostics
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        provider: Optional[str] = None,
        step: Optional[str] = None,
        body: str = "",
    ):
        super().__init__(message, provider=provider, step=step)
        self.status_code = status_code
        self.body = body


class DecodeError(ProviderError):
    """Raised when a response body is not the JSON document expected."""
    pass
