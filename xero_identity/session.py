# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Xero authentication session and its persisted form."""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .errors import AuthenticationError, DeserializeError, NoAuthURLError
from .models import format_timestamp, parse_timestamp
from .provider import Session

if TYPE_CHECKING:
    from .xero_provider import XeroIdentityProvider

PROVIDER_NAME = "xero"

# Persisted key -> attribute, in serialization order.
_FIELDS = (
    ("AuthURL", "auth_url"),
    ("AccessToken", "access_token"),
    ("Hostname", "hostname"),
    ("HMAC", "hmac"),
)


@dataclass
class XeroSession(Session):
    """State of one Xero authentication attempt.

    The authorization URL is write-once: after it is set to a non-empty
    value, assigning a different value raises ``AttributeError``. The
    refresh token lives in memory only and is not part of ``marshal``.

    Attributes:
        auth_url: Authorization URL, empty until ``begin_auth`` runs
        access_token: Access token, empty until the code exchange completes
        refresh_token: Refresh token, present when offline access was granted
        expires_at: Access token expiry, ``None`` when unknown
        hostname: Provider-specific tenant hint, carried verbatim
        hmac: Provider-specific callback signature, carried verbatim
    """
    auth_url: str = ""
    access_token: str = ""
    refresh_token: str = ""
    expires_at: Optional[datetime] = None
    hostname: str = ""
    hmac: str = ""

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "auth_url":
            current = getattr(self, "auth_url", "")
            if current and value != current:
                raise AttributeError("auth_url is already set for this session")
        super().__setattr__(name, value)

    def get_auth_url(self) -> str:
        if not self.auth_url:
            raise NoAuthURLError(
                f"{PROVIDER_NAME}: an AuthURL has not been set",
                provider=PROVIDER_NAME,
                step="get auth url",
            )
        return self.auth_url

    def authorize(self, provider: "XeroIdentityProvider", params: Mapping[str, Any]) -> str:
        """Exchange the callback's authorization code and store the tokens.

        Args:
            provider: Provider whose OAuth2 configuration and client are used
            params: Callback query parameters; ``code`` is required

        Returns:
            The new access token

        Raises:
            AuthenticationError: If the callback carries no code
            ProviderError: If the token endpoint fails
        """
        code = params.get("code")
        if not code:
            raise AuthenticationError(
                f"{provider.name} callback is missing the authorization code",
                provider=provider.name,
                step="exchange the authorization code",
            )

        token = provider.config.exchange(code, provider.client)
        self.access_token = token.access_token
        self.refresh_token = token.refresh_token
        self.expires_at = token.expiry
        return token.access_token

    def marshal(self) -> str:
        data: dict[str, str] = {key: getattr(self, attr) for key, attr in _FIELDS}
        data["ExpiresAt"] = format_timestamp(self.expires_at)
        return json.dumps(data, separators=(",", ":"))

    @classmethod
    def unmarshal(cls, text: str) -> "XeroSession":
        """Restore a session from ``marshal`` output.

        Only the leading JSON object is read; anything after it (such as a
        stray quote left by the host's storage) is ignored. Missing keys
        are left empty and unknown keys are dropped.

        Raises:
            DeserializeError: If the text does not start with a JSON object
                of string fields, or ExpiresAt is not an RFC3339 timestamp
        """
        try:
            data, _ = json.JSONDecoder().raw_decode(text.lstrip())
        except (json.JSONDecodeError, AttributeError) as e:
            raise DeserializeError(f"cannot decode session: {e}", step="unmarshal session") from e

        if not isinstance(data, dict):
            raise DeserializeError("cannot decode session: not a JSON object", step="unmarshal session")

        values: dict[str, Any] = {}
        for key, attr in _FIELDS + (("ExpiresAt", "expires_at"),):
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise DeserializeError(
                    f"cannot decode session: {key} must be a string",
                    step="unmarshal session",
                )
            values[attr] = value

        try:
            values["expires_at"] = parse_timestamp(values.get("expires_at", ""))
        except ValueError as e:
            raise DeserializeError(f"cannot decode session: {e}", step="unmarshal session") from e

        return cls(**values)
