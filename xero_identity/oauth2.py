# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""OAuth2 authorization-code client configuration.

``OAuth2Config`` builds authorization URLs and talks to a token endpoint for
the ``authorization_code`` and ``refresh_token`` grants. Each exchange is a
single request: there are no retries and every failure is raised.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import httpx

from .errors import DecodeError, TransportError, UpstreamStatusError
from .models import Token
from .scopes import join_scopes


@dataclass(frozen=True)
class Endpoint:
    """Authorization and token endpoint URLs of a provider."""
    auth_url: str
    token_url: str


@dataclass
class OAuth2Config:
    """Client credentials, redirect URL, endpoints and scopes for one client.

    ``scopes`` are sent exactly as given, joined with a single space.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        redirect_url: Callback URL registered with the provider
        endpoint: Provider endpoints
        scopes: Scope tokens in wire format
        provider_name: Name used in error messages
    """
    client_id: str
    client_secret: str
    redirect_url: str
    endpoint: Endpoint
    scopes: List[str] = field(default_factory=list)
    provider_name: str = "oauth2"

    def auth_code_url(self, state: str, **extra_params: str) -> str:
        """Build the authorization URL for the authorization-code flow.

        Args:
            state: Opaque value the provider echoes back on the callback
            **extra_params: Additional query parameters (e.g. ``prompt``)

        Returns:
            Authorization URL with form-encoded, key-sorted query parameters
        """
        params: Dict[str, str] = {
            "client_id": self.client_id,
            "response_type": "code",
        }
        if self.redirect_url:
            params["redirect_uri"] = self.redirect_url
        if self.scopes:
            params["scope"] = join_scopes(self.scopes)
        if state:
            params["state"] = state
        params.update(extra_params)

        query = str(httpx.QueryParams(sorted(params.items())))
        separator = "&" if "?" in self.endpoint.auth_url else "?"
        return f"{self.endpoint.auth_url}{separator}{query}"

    def exchange(self, code: str, client: httpx.Client) -> Token:
        """Exchange an authorization code for a token.

        Raises:
            TransportError: If the token endpoint cannot be reached
            UpstreamStatusError: If the token endpoint rejects the code
            DecodeError: If the response is not a usable token document
        """
        data = {"grant_type": "authorization_code", "code": code}
        if self.redirect_url:
            data["redirect_uri"] = self.redirect_url
        return self._retrieve_token(data, client, step="exchange the authorization code")

    def refresh(self, refresh_token: str, client: httpx.Client) -> Token:
        """Exchange a refresh token for a new access token.

        When the response carries no new refresh token the submitted one
        is kept on the returned token.

        Raises:
            TransportError: If the token endpoint cannot be reached
            UpstreamStatusError: If the token endpoint rejects the refresh token
            DecodeError: If the response is not a usable token document
        """
        data = {"grant_type": "refresh_token", "refresh_token": refresh_token}
        token = self._retrieve_token(data, client, step="refresh the access token")
        if not token.refresh_token:
            token.refresh_token = refresh_token
        return token

    def _retrieve_token(self, data: Dict[str, str], client: httpx.Client, step: str) -> Token:
        try:
            response = client.post(
                self.endpoint.token_url,
                data=data,
                auth=(self.client_id, self.client_secret),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"{self.provider_name} failed to {step}: {e}",
                provider=self.provider_name,
                step=step,
            ) from e

        if not response.is_success:
            raise UpstreamStatusError(
                f"{self.provider_name} responded with a {response.status_code} trying to {step}",
                status_code=response.status_code,
                provider=self.provider_name,
                step=step,
                body=response.text,
            )

        try:
            payload: Any = response.json()
            if not isinstance(payload, dict):
                raise ValueError("token response is not a JSON object")
            return Token.from_response(payload)
        except (ValueError, TypeError) as e:
            raise DecodeError(
                f"{self.provider_name} returned an invalid token response trying to {step}: {e}",
                provider=self.provider_name,
                step=step,
            ) from e
