# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Xero identity adapter.

Turns a Xero OAuth2 authorization-code flow into a normalized identity
record: the session lifecycle (authorization URL, code exchange, token
refresh, persistence) and the two-step identity resolution (authorized
tenant discovery, then the tenant's organisation profile).
"""

__version__ = "0.1.0"

from .config import XeroProviderConfig
from .errors import (
    AuthenticationError,
    DecodeError,
    DeserializeError,
    IdentityError,
    NoAccessTokenError,
    NoAuthorizedTenantsError,
    NoAuthURLError,
    NoOrganizationsError,
    ProviderError,
    TransportError,
    UpstreamStatusError,
)
from .factory import ProviderRegistry, create_identity_provider
from .models import OrganisationProfile, Token, User, XeroOrganisation, XeroTenant
from .oauth2 import Endpoint, OAuth2Config
from .provider import IdentityProvider, Session
from .session import XeroSession
from .xero_provider import XeroIdentityProvider

__all__ = [
    # Version
    "__version__",
    # Models
    "User",
    "Token",
    "XeroTenant",
    "XeroOrganisation",
    "OrganisationProfile",
    # Contracts
    "IdentityProvider",
    "Session",
    # Xero
    "XeroIdentityProvider",
    "XeroSession",
    "XeroProviderConfig",
    # OAuth2
    "Endpoint",
    "OAuth2Config",
    # Factory
    "create_identity_provider",
    "ProviderRegistry",
    # Exceptions
    "IdentityError",
    "AuthenticationError",
    "ProviderError",
    "NoAuthURLError",
    "NoAccessTokenError",
    "NoAuthorizedTenantsError",
    "NoOrganizationsError",
    "DeserializeError",
    "TransportError",
    "UpstreamStatusError",
    "DecodeError",
]
