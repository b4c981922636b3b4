# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Fake Xero API served through httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any

import httpx


TENANTS = [
    {
        "id": "conn-1",
        "tenantId": "tenant-1",
        "tenantType": "ORGANISATION",
        "tenantName": "Demo Company (NZ)",
    },
    {
        "id": "conn-2",
        "tenantId": "tenant-2",
        "tenantType": "ORGANISATION",
        "tenantName": "Second Company",
    },
]

ORGANISATIONS = {
    "Id": "resp-1",
    "Status": "OK",
    "ProviderName": "Test App",
    "Organisations": [
        {
            "Name": "Demo Company (NZ)",
            "LegalName": "Demo Company (NZ) Limited",
            "OrganisationType": "COMPANY",
            "CountryCode": "NZ",
            "ShortCode": "!AbC12",
            "BaseCurrency": "NZD",
        },
        {
            "Name": "Other Org",
            "LegalName": "Other Org Limited",
            "ShortCode": "!ZzZ99",
        },
    ],
}

TOKEN_RESPONSE = {
    "access_token": "new-access-token",
    "token_type": "Bearer",
    "expires_in": 1800,
    "refresh_token": "new-refresh-token",
    "id_token": "header.payload.signature",
    "scope": "openid profile email offline_access accounting.settings.read",
}


class FakeXeroAPI:
    """Callable MockTransport handler that records every request.

    Each endpoint answers with the configured status and body; a body given
    as ``bytes`` is sent verbatim, anything else is sent as JSON.
    """

    def __init__(
        self,
        tenants: Any = None,
        tenants_status: int = 200,
        organisations: Any = None,
        organisations_status: int = 200,
        token: Any = None,
        token_status: int = 200,
        fail_with: Exception | None = None,
    ):
        self.tenants = TENANTS if tenants is None else tenants
        self.tenants_status = tenants_status
        self.organisations = ORGANISATIONS if organisations is None else organisations
        self.organisations_status = organisations_status
        self.token = TOKEN_RESPONSE if token is None else token
        self.token_status = token_status
        self.fail_with = fail_with
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        if request.url.host == "api.xero.com" and request.url.path == "/connections":
            return self._respond(self.tenants_status, self.tenants)
        if request.url.host == "api.xero.com" and request.url.path == "/api.xro/2.0/Organisation":
            return self._respond(self.organisations_status, self.organisations)
        if request.url.host == "identity.xero.com" and request.url.path == "/connect/token":
            return self._respond(self.token_status, self.token)
        return httpx.Response(404, json={"error": "not found"})

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, content=json.dumps(body).encode("utf-8"))

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def form(self, index: int = -1) -> dict[str, str]:
        """Decode the form body of a recorded request."""
        return dict(httpx.QueryParams(self.requests[index].content.decode("utf-8")))


