# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Identity, token and Xero payload models.

``User`` is the normalized identity record handed to the host application.
``Token`` is the result of a token endpoint exchange. The pydantic models
describe the parts of Xero's connections and organisation payloads the
adapter reads.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"

_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a datetime as RFC3339; ``None`` becomes the zero timestamp.

    Naive datetimes are taken to be UTC. Fractional seconds are written
    without trailing zeros, and UTC is written as ``Z``.
    """
    if value is None:
        return ZERO_TIMESTAMP
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")

    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse an RFC3339 timestamp; the zero timestamp and "" become ``None``.

    Raises:
        ValueError: If the text is not an RFC3339 timestamp
    """
    if not text or text == ZERO_TIMESTAMP:
        return None

    match = _RFC3339_RE.match(text)
    if not match:
        raise ValueError(f"invalid RFC3339 timestamp: {text!r}")

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    offset = match.group("offset")
    if offset == "Z":
        offset = "+00:00"
    return datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")


@dataclass(frozen=True)
class User:
    """Normalized identity produced by a successful ``fetch_user``.

    For Xero the "user" is the first organisation the user authorized, so
    ``name`` is the organisation name, ``nick_name`` its legal name and
    ``user_id`` its short code.

    Attributes:
        provider: Name of the provider instance that resolved the identity
        user_id: Organisation short code
        name: Organisation display name
        nick_name: Organisation legal name
        access_token: Access token copied from the session
        refresh_token: Refresh token copied from the session
        expires_at: Access token expiry copied from the session
        raw_data: Decoded organisation profile payload, untouched
    """
    provider: str
    user_id: str = ""
    name: str = ""
    nick_name: str = ""
    access_token: str = ""
    refresh_token: str = ""
    expires_at: Optional[datetime] = None
    raw_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert the identity to a JSON-friendly dictionary."""
        return {
            "provider": self.provider,
            "user_id": self.user_id,
            "name": self.name,
            "nick_name": self.nick_name,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": format_timestamp(self.expires_at),
            "raw_data": self.raw_data,
        }


@dataclass
class Token:
    """OAuth2 token returned by the token endpoint.

    Attributes:
        access_token: Bearer token for API calls
        token_type: Token type, normally "Bearer"
        refresh_token: Refresh token, empty unless offline access was granted
        expiry: Aware UTC expiry time, ``None`` if the server gave none
        extra: Full decoded token response (id_token, scope, ...)
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: str = ""
    expiry: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Dict[str, Any], now: Optional[datetime] = None) -> "Token":
        """Build a token from a decoded token endpoint response.

        Raises:
            ValueError: If ``access_token`` is missing or ``expires_in`` is not
                a number of seconds that fits in a datetime
        """
        access_token = payload.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise ValueError("token response is missing access_token")

        expiry = None
        expires_in = payload.get("expires_in")
        if expires_in not in (None, "", 0, "0"):
            now = now or datetime.now(timezone.utc)
            try:
                expiry = now + timedelta(seconds=int(expires_in))
            except OverflowError as e:
                raise ValueError(f"expires_in is out of range: {expires_in!r}") from e

        return cls(
            access_token=access_token,
            token_type=payload.get("token_type") or "Bearer",
            refresh_token=payload.get("refresh_token") or "",
            expiry=expiry,
            extra=dict(payload),
        )

    @property
    def valid(self) -> bool:
        """True when an access token is present and not expired."""
        if not self.access_token:
            return False
        return self.expiry is None or self.expiry > datetime.now(timezone.utc)


class XeroTenant(BaseModel):
    """One entry of the connections (authorized tenants) response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    tenant_id: str = Field(default="", alias="tenantId")
    tenant_type: str = Field(default="", alias="tenantType")
    tenant_name: Optional[str] = Field(default=None, alias="tenantName")

    @field_validator("id", "tenant_id", "tenant_type", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class XeroOrganisation(BaseModel):
    """The organisation fields the adapter maps onto ``User``.

    Xero sends ``null`` for fields an organisation has not filled in;
    those read as empty strings.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", alias="Name")
    legal_name: str = Field(default="", alias="LegalName")
    organisation_type: str = Field(default="", alias="OrganisationType")
    country_code: str = Field(default="", alias="CountryCode")
    short_code: str = Field(default="", alias="ShortCode")

    @field_validator("name", "legal_name", "organisation_type", "country_code", "short_code", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class OrganisationProfile(BaseModel):
    """Organisation endpoint response: typed organisations plus the raw payload.

    The body is decoded once; ``raw_data`` keeps the untouched JSON object
    for consumers that need fields the typed view drops.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    organisations: List[XeroOrganisation] = Field(default_factory=list, alias="Organisations")
    raw_data: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    @field_validator("organisations", mode="before")
    @classmethod
    def _null_organisations(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "OrganisationProfile":
        """Validate a decoded organisation response and keep it as raw data."""
        profile = cls.model_validate(payload)
        profile.raw_data = payload
        return profile
