# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Factory and registry for identity providers.

``create_identity_provider`` builds a provider from keyword arguments.
``ProviderRegistry`` holds configured providers by name so that several
instances of the same provider type, renamed with ``set_name``, can be
used side by side.
"""

from typing import Dict, List, Optional

from .provider import IdentityProvider
from .xero_provider import XeroIdentityProvider

SUPPORTED_PROVIDERS = ("xero",)


def create_identity_provider(
    provider_type: Optional[str] = None,
    **kwargs
) -> IdentityProvider:
    """Create an identity provider based on type.

    Supported provider types:
    - "xero": XeroIdentityProvider for Xero OAuth2

    Args:
        provider_type: Type of provider to create (required)
        **kwargs: Provider-specific configuration parameters:
            - For Xero: client_id (required), client_secret (required),
                        redirect_uri (required), scopes (optional),
                        http_client (optional), name (optional)

    Returns:
        IdentityProvider instance

    Raises:
        ValueError: If provider_type is unknown or required parameters are missing

    Examples:
        >>> provider = create_identity_provider(
        ...     "xero",
        ...     client_id="your_client_id",
        ...     client_secret="your_client_secret",
        ...     redirect_uri="https://auth.example.com/callback",
        ...     name="xero-sandbox",
        ... )
    """
    if not provider_type:
        raise ValueError(
            "provider_type parameter is required. "
            f"Must be one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )

    provider_type = provider_type.lower()

    if provider_type == "xero":
        client_id = kwargs.get("client_id")
        client_secret = kwargs.get("client_secret")
        redirect_uri = kwargs.get("redirect_uri")

        if not client_id:
            raise ValueError(
                "client_id parameter is required for Xero provider. "
                "Provide the Xero OAuth client ID explicitly"
            )

        if not client_secret:
            raise ValueError(
                "client_secret parameter is required for Xero provider. "
                "Provide the Xero OAuth client secret explicitly"
            )

        if not redirect_uri:
            raise ValueError(
                "redirect_uri parameter is required for Xero provider. "
                "Provide the OAuth callback URL explicitly"
            )

        provider = XeroIdentityProvider(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scopes=kwargs.get("scopes"),
            http_client=kwargs.get("http_client"),
        )
        if kwargs.get("name"):
            provider.set_name(kwargs["name"])
        return provider

    else:
        raise ValueError(
            f"Unknown identity provider type: {provider_type}. "
            f"Supported types: {', '.join(SUPPORTED_PROVIDERS)}"
        )


class ProviderRegistry:
    """Named collection of configured providers.

    Providers are keyed by their name at registration time; registering a
    provider under a name already in use replaces the earlier one.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, IdentityProvider] = {}

    def use(self, *providers: IdentityProvider) -> None:
        """Register providers under their current names."""
        for provider in providers:
            self._providers[provider.name] = provider

    def get(self, name: str) -> IdentityProvider:
        """Return the provider registered as ``name``.

        Raises:
            KeyError: If no provider is registered under that name
        """
        try:
            return self._providers[name]
        except KeyError:
            raise KeyError(f"no provider registered for name {name!r}") from None

    def names(self) -> List[str]:
        return list(self._providers)

    def clear(self) -> None:
        self._providers.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
