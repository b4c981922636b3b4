# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Shared fixtures for the xero_identity tests."""

import httpx
import pytest

from fake_xero import FakeXeroAPI
from xero_identity import XeroIdentityProvider, XeroSession


@pytest.fixture
def fake_api():
    """Fake Xero API with default successful responses."""
    return FakeXeroAPI()


@pytest.fixture
def make_provider():
    """Build a provider whose HTTP client is served by the given fake API."""
    def _make(api: FakeXeroAPI, **kwargs) -> XeroIdentityProvider:
        client = httpx.Client(transport=httpx.MockTransport(api))
        return XeroIdentityProvider(
            client_id=kwargs.pop("client_id", "test-client-id"),
            client_secret=kwargs.pop("client_secret", "test-client-secret"),
            redirect_uri=kwargs.pop("redirect_uri", "https://app.example.com/callback"),
            http_client=client,
            **kwargs,
        )
    return _make


@pytest.fixture
def authorized_session():
    """Session that has completed the code exchange."""
    return XeroSession(
        auth_url="https://login.xero.com/identity/connect/authorize?state=abc",
        access_token="access-token-123",
        refresh_token="refresh-token-456",
    )
