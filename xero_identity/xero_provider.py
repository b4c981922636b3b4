# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Xero OAuth2 identity provider.

Xero identities are organisations rather than people. After the user
consents, the provider resolves an identity in two calls:

1. ``GET /connections`` lists the tenants the user authorized.
2. ``GET /api.xro/2.0/Organisation`` with ``Xero-Tenant-Id`` set to the
   first tenant returns that tenant's organisation profile.

The first tenant and the first organisation win; the rest of either list
is ignored.
"""

from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from xero_logging import create_logger

from .config import XeroProviderConfig
from .errors import (
    DecodeError,
    NoAccessTokenError,
    NoAuthorizedTenantsError,
    NoOrganizationsError,
    TransportError,
    UpstreamStatusError,
)
from .models import OrganisationProfile, Token, User, XeroTenant
from .oauth2 import Endpoint, OAuth2Config
from .provider import IdentityProvider, Session, http_client_with_fallback
from .scopes import DEFAULT_SCOPES, scopes_to_strings
from .session import PROVIDER_NAME, XeroSession

logger = create_logger(name="xero_identity.xero_provider")

AUTH_URL = "https://login.xero.com/identity/connect/authorize"
TOKEN_URL = "https://identity.xero.com/connect/token"
TENANTS_URL = "https://api.xero.com/connections"
PROFILE_URL = "https://api.xero.com/api.xro/2.0/Organisation"

TENANT_HEADER = "Xero-Tenant-Id"

STEP_TENANTS = "fetch authorized tenants"
STEP_PROFILE = "fetch tenant organisation"


class XeroIdentityProvider(IdentityProvider):
    """Xero OAuth2 identity provider.

    The configuration is read-only after construction, so one instance may
    serve many concurrent authentication attempts as long as each attempt
    has its own session.

    Attributes:
        client_id: Xero OAuth application client ID
        client_secret: Xero OAuth application client secret
        redirect_uri: OAuth callback URL
        http_client: Injected HTTP client, or None for the shared default
        config: OAuth2 client configuration built from the above
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: Optional[List[str]] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the Xero identity provider.

        Args:
            client_id: Xero OAuth application client ID
            client_secret: Xero OAuth application client secret
            redirect_uri: OAuth callback URL
            scopes: Scopes to request (default: ``DEFAULT_SCOPES``)
            http_client: HTTP client for all upstream calls
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.http_client = http_client
        self.scopes = list(scopes) if scopes else list(DEFAULT_SCOPES)
        self._name = PROVIDER_NAME
        self.config = OAuth2Config(
            client_id=client_id,
            client_secret=client_secret,
            redirect_url=redirect_uri,
            endpoint=Endpoint(auth_url=AUTH_URL, token_url=TOKEN_URL),
            scopes=scopes_to_strings(*self.scopes),
            provider_name=self._name,
        )

    @classmethod
    def from_config(
        cls,
        config: XeroProviderConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> "XeroIdentityProvider":
        """Create a provider from validated configuration.

        Args:
            config: Provider configuration
            http_client: HTTP client for all upstream calls

        Returns:
            Configured provider, renamed if the configuration names it
        """
        provider = cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            redirect_uri=config.redirect_uri,
            scopes=config.scopes,
            http_client=http_client,
        )
        if config.provider_name:
            provider.set_name(config.provider_name)
        return provider

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name
        self.config.provider_name = name

    @property
    def client(self) -> httpx.Client:
        return http_client_with_fallback(self.http_client)

    def begin_auth(self, state: str) -> XeroSession:
        """Start an authentication attempt against Xero's authorize endpoint."""
        return XeroSession(auth_url=self.config.auth_code_url(state))

    def unmarshal_session(self, text: str) -> XeroSession:
        return XeroSession.unmarshal(text)

    def refresh_token_available(self) -> bool:
        return True

    def refresh_token(self, refresh_token: str) -> Token:
        """Exchange a refresh token for a new access token.

        One request is made; failures are raised for the caller to handle.

        Raises:
            TransportError: If the token endpoint cannot be reached
            UpstreamStatusError: If the token endpoint rejects the refresh token
            DecodeError: If the token response cannot be decoded
        """
        logger.debug("Refreshing Xero access token", provider=self._name)
        try:
            return self.config.refresh(refresh_token, self.client)
        except (TransportError, UpstreamStatusError, DecodeError) as e:
            logger.warning(f"Xero token refresh failed: {e}", provider=self._name)
            raise

    def fetch_user(self, session: Session) -> User:
        """Resolve the organisation identity behind an authorized session.

        Args:
            session: Session holding an access token

        Returns:
            User built from the first authorized tenant's first organisation

        Raises:
            NoAccessTokenError: If the session has no access token (no call is made)
            NoAuthorizedTenantsError: If the user authorized no tenants
            NoOrganizationsError: If the organisation profile lists none
            TransportError: If either call fails before a response arrives
            UpstreamStatusError: If either call answers with a non-200 status
            DecodeError: If either body is not the expected JSON
        """
        if not isinstance(session, XeroSession):
            raise TypeError(f"{self._name} expects a XeroSession, got {type(session).__name__}")

        if not session.access_token:
            raise NoAccessTokenError(
                f"{self._name} cannot get organisation information without an access token",
                provider=self._name,
                step="fetch user",
            )

        tenants = self._fetch_authorized_tenants(session.access_token)
        if not tenants:
            logger.warning("No authorized Xero tenants found", provider=self._name)
            raise NoAuthorizedTenantsError(
                f"{self._name} found no authorized tenants",
                provider=self._name,
                step=STEP_TENANTS,
            )

        tenant = tenants[0]
        if len(tenants) > 1:
            logger.debug(
                "Multiple authorized Xero tenants, using the first",
                provider=self._name,
                tenant_count=len(tenants),
                tenant_id=tenant.tenant_id,
            )

        user = self._fetch_tenant_information(session, tenant.tenant_id)
        logger.info(
            "Resolved Xero identity",
            provider=self._name,
            tenant_id=tenant.tenant_id,
            tenant_name=tenant.tenant_name,
            user_id=user.user_id,
        )
        return user

    def _get(self, url: str, headers: dict[str, str], step: str) -> Any:
        """GET ``url`` and return the decoded JSON body.

        ``httpx.Client.get`` reads the whole body and releases the
        connection before returning, on success and failure alike.
        """
        logger.debug(f"Requesting Xero {step}", provider=self._name, url=url)
        try:
            response = self.client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Xero request failed trying to {step}: {e}", provider=self._name)
            raise TransportError(
                f"{self._name} failed trying to {step}: {e}",
                provider=self._name,
                step=step,
            ) from e

        if response.status_code != httpx.codes.OK:
            logger.warning(
                f"Xero responded with a {response.status_code} trying to {step}",
                provider=self._name,
                status_code=response.status_code,
            )
            raise UpstreamStatusError(
                f"{self._name} responded with a {response.status_code} trying to {step}",
                status_code=response.status_code,
                provider=self._name,
                step=step,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"{self._name} returned malformed JSON trying to {step}: {e}",
                provider=self._name,
                step=step,
            ) from e

    def _fetch_authorized_tenants(self, access_token: str) -> list[XeroTenant]:
        payload = self._get(
            TENANTS_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            step=STEP_TENANTS,
        )
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise DecodeError(
                f"{self._name} returned a non-list tenants document trying to {STEP_TENANTS}",
                provider=self._name,
                step=STEP_TENANTS,
            )

        try:
            return [XeroTenant.model_validate(item) for item in payload]
        except ValidationError as e:
            raise DecodeError(
                f"{self._name} returned malformed tenants trying to {STEP_TENANTS}: {e}",
                provider=self._name,
                step=STEP_TENANTS,
            ) from e

    def _fetch_tenant_information(self, session: XeroSession, tenant_id: str) -> User:
        payload = self._get(
            PROFILE_URL,
            headers={
                "Authorization": f"Bearer {session.access_token}",
                TENANT_HEADER: tenant_id,
            },
            step=STEP_PROFILE,
        )
        if not isinstance(payload, dict):
            raise DecodeError(
                f"{self._name} returned a non-object organisation document trying to {STEP_PROFILE}",
                provider=self._name,
                step=STEP_PROFILE,
            )

        try:
            profile = OrganisationProfile.from_payload(payload)
        except ValidationError as e:
            raise DecodeError(
                f"{self._name} returned malformed organisations trying to {STEP_PROFILE}: {e}",
                provider=self._name,
                step=STEP_PROFILE,
            ) from e

        if not profile.organisations:
            raise NoOrganizationsError(
                f"{self._name} returned no organisations for tenant {tenant_id}",
                provider=self._name,
                step=STEP_PROFILE,
            )

        organisation = profile.organisations[0]
        return User(
            provider=self._name,
            user_id=organisation.short_code,
            name=organisation.name,
            nick_name=organisation.legal_name,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            raw_data=profile.raw_data,
        )
