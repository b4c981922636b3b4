# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Abstract contracts a host authentication framework programs against.

A host drives many providers through the same two types:

- ``Session`` carries the in-flight artifacts of one authentication attempt
  and knows how to persist itself as text.
- ``IdentityProvider`` starts the flow, resolves the identity behind an
  authorized session, and refreshes tokens.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import httpx

from .models import Token, User

_default_client: Optional[httpx.Client] = None


def http_client_with_fallback(client: Optional[httpx.Client]) -> httpx.Client:
    """Return ``client``, or a process-wide default client when it is ``None``.

    The default client uses httpx's default timeouts; hosts that need other
    timeouts, proxies or transports inject their own client.
    """
    global _default_client
    if client is not None:
        return client
    if _default_client is None:
        _default_client = httpx.Client()
    return _default_client


class Session(ABC):
    """State of one authentication attempt."""

    @abstractmethod
    def get_auth_url(self) -> str:
        """Return the authorization URL.

        Raises:
            NoAuthURLError: If the flow has not been started
        """
        pass

    @abstractmethod
    def authorize(self, provider: "IdentityProvider", params: Mapping[str, Any]) -> str:
        """Complete the callback: exchange the code and store the tokens.

        Returns:
            The new access token
        """
        pass

    @abstractmethod
    def marshal(self) -> str:
        """Serialize the session to text the host can persist."""
        pass

    @classmethod
    @abstractmethod
    def unmarshal(cls, text: str) -> "Session":
        """Restore a session from ``marshal`` output.

        Raises:
            DeserializeError: If the text is malformed
        """
        pass

    def __str__(self) -> str:
        return self.marshal()


class IdentityProvider(ABC):
    """Abstract base class for identity providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the provider is registered under."""
        pass

    @abstractmethod
    def set_name(self, name: str) -> None:
        """Rename the provider, so several instances of one type can coexist."""
        pass

    @property
    @abstractmethod
    def client(self) -> httpx.Client:
        """HTTP client used for every upstream call."""
        pass

    @abstractmethod
    def begin_auth(self, state: str) -> Session:
        """Start an authentication attempt.

        Args:
            state: Opaque CSRF value the provider echoes back on the callback

        Returns:
            A session whose authorization URL is set
        """
        pass

    @abstractmethod
    def unmarshal_session(self, text: str) -> Session:
        """Restore a session of this provider's type from persisted text."""
        pass

    @abstractmethod
    def fetch_user(self, session: Session) -> User:
        """Resolve the identity behind an authorized session.

        Raises:
            AuthenticationError: If the session or upstream data is insufficient
            ProviderError: If the provider service is unavailable or misbehaves
        """
        pass

    @abstractmethod
    def refresh_token_available(self) -> bool:
        """Whether ``refresh_token`` is supported."""
        pass

    @abstractmethod
    def refresh_token(self, refresh_token: str) -> Token:
        """Exchange a refresh token for a new access token."""
        pass

    def debug(self, enabled: bool) -> None:
        """Toggle debug output. Providers without debug output ignore it."""
        pass
