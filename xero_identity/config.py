# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Xero provider configuration.

Configuration is validated with pydantic and can be read from the
environment:

- ``XERO_KEY``: OAuth client ID (required)
- ``XERO_SECRET``: OAuth client secret (required)
- ``XERO_CALLBACK_URL``: OAuth callback URL (required)
- ``XERO_SCOPES``: comma or space separated scopes (optional)
- ``XERO_PROVIDER_NAME``: name to register the provider under (optional)
"""

import os
import re
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_CLIENT_ID = "XERO_KEY"
ENV_CLIENT_SECRET = "XERO_SECRET"
ENV_CALLBACK_URL = "XERO_CALLBACK_URL"
ENV_SCOPES = "XERO_SCOPES"
ENV_PROVIDER_NAME = "XERO_PROVIDER_NAME"


class XeroProviderConfig(BaseModel):
    """Credentials, callback URL and scopes for one Xero provider instance.

    An empty ``scopes`` list means the default scope set.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    redirect_uri: str = Field(min_length=1)
    scopes: List[str] = Field(default_factory=list)
    provider_name: Optional[str] = None

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [scope for scope in re.split(r"[,\s]+", value) if scope]
        return value

    @field_validator("provider_name")
    @classmethod
    def _blank_name_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "XeroProviderConfig":
        """Load configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Validated configuration

        Raises:
            ValueError: If a required variable is missing or empty
        """
        env = environ if environ is not None else os.environ

        for var in (ENV_CLIENT_ID, ENV_CLIENT_SECRET, ENV_CALLBACK_URL):
            if not env.get(var):
                raise ValueError(
                    f"{var} environment variable is required for the Xero provider. "
                    f"Set it or pass the configuration explicitly"
                )

        return cls(
            client_id=env[ENV_CLIENT_ID],
            client_secret=env[ENV_CLIENT_SECRET],
            redirect_uri=env[ENV_CALLBACK_URL],
            scopes=env.get(ENV_SCOPES),
            provider_name=env.get(ENV_PROVIDER_NAME),
        )
