# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Tests for XeroSession."""

from datetime import datetime, timedelta, timezone

import pytest

from fake_xero import FakeXeroAPI
from xero_identity import (
    AuthenticationError,
    DeserializeError,
    NoAuthURLError,
    Session,
    UpstreamStatusError,
    XeroSession,
)

EMPTY_SESSION_JSON = (
    '{"AuthURL":"","AccessToken":"","Hostname":"","HMAC":"","ExpiresAt":"0001-01-01T00:00:00Z"}'
)


class TestSessionContract:
    """Tests for the session contract."""

    def test_implements_session(self):
        """Test XeroSession satisfies the Session contract."""
        assert isinstance(XeroSession(), Session)

    def test_get_auth_url_fails_for_fresh_session(self):
        """Test a fresh session has no authorization URL."""
        session = XeroSession()

        with pytest.raises(NoAuthURLError) as exc_info:
            session.get_auth_url()

        assert exc_info.value.provider == "xero"
        assert exc_info.value.step == "get auth url"
        assert "xero" in str(exc_info.value)

    def test_get_auth_url_returns_value_verbatim(self):
        """Test the authorization URL is returned exactly once set."""
        session = XeroSession()
        session.auth_url = "/foo"

        assert session.get_auth_url() == "/foo"

    def test_auth_url_is_write_once(self):
        """Test the authorization URL cannot be replaced once set."""
        session = XeroSession(auth_url="https://login.xero.com/a")

        with pytest.raises(AttributeError):
            session.auth_url = "https://login.xero.com/b"

        assert session.get_auth_url() == "https://login.xero.com/a"

    def test_auth_url_same_value_assignment_allowed(self):
        """Test reassigning the same authorization URL is harmless."""
        session = XeroSession(auth_url="https://login.xero.com/a")

        session.auth_url = "https://login.xero.com/a"

        assert session.auth_url == "https://login.xero.com/a"


class TestMarshal:
    """Tests for session serialization."""

    def test_marshal_empty_session(self):
        """Test zero values are all written out in fixed order."""
        assert XeroSession().marshal() == EMPTY_SESSION_JSON

    def test_string_matches_marshal(self):
        """Test str() output equals marshal()."""
        session = XeroSession(auth_url="https://x", access_token="tok")

        assert str(session) == session.marshal()

    def test_marshal_populated_session(self):
        """Test all persisted fields are written with an RFC3339 expiry."""
        session = XeroSession(
            auth_url="https://x",
            access_token="tok",
            hostname="demo.xero.com",
            hmac="sig",
            expires_at=datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc),
        )

        assert session.marshal() == (
            '{"AuthURL":"https://x","AccessToken":"tok","Hostname":"demo.xero.com",'
            '"HMAC":"sig","ExpiresAt":"2025-06-01T12:00:00Z"}'
        )

    def test_refresh_token_not_persisted(self):
        """Test the refresh token stays out of the persisted form."""
        session = XeroSession(refresh_token="secret-refresh")

        assert "secret-refresh" not in session.marshal()

    @pytest.mark.parametrize(
        "session",
        [
            XeroSession(),
            XeroSession(auth_url="https://login.xero.com/identity/connect/authorize?a=1&b=2"),
            XeroSession(access_token="tok", hostname="hé", hmac='q"uote'),
            XeroSession(
                access_token="tok",
                expires_at=datetime(2025, 6, 1, 12, 0, 0, 250000, tzinfo=timezone(timedelta(hours=-7))),
            ),
        ],
    )
    def test_round_trip_is_stable(self, session):
        """Test marshal, unmarshal, marshal yields the same text."""
        text = session.marshal()

        assert XeroSession.unmarshal(text).marshal() == text


class TestUnmarshal:
    """Tests for session deserialization."""

    def test_unmarshal_tolerates_trailing_quote(self):
        """Test a stray trailing quote after the object is ignored."""
        session = XeroSession.unmarshal('{"AuthURL":"https://x","AccessToken":"tok"}"')

        assert session.auth_url == "https://x"
        assert session.access_token == "tok"
        assert session.expires_at is None

    def test_unmarshal_parses_expiry(self):
        """Test the expiry is restored as an aware datetime."""
        session = XeroSession.unmarshal('{"ExpiresAt":"2025-06-01T12:00:00Z"}')

        assert session.expires_at == datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_unmarshal_ignores_unknown_keys(self):
        """Test keys outside the persisted form are dropped."""
        session = XeroSession.unmarshal('{"AuthURL":"https://x","Extra":42}')

        assert session.auth_url == "https://x"

    def test_unmarshal_null_field_is_empty(self):
        """Test a null field is treated as unset."""
        session = XeroSession.unmarshal('{"AuthURL":null,"AccessToken":"tok"}')

        assert session.auth_url == ""
        assert session.access_token == "tok"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not json",
            '{"AuthURL": "unterminated',
            '["AuthURL"]',
            '{"AuthURL": 42}',
            '{"ExpiresAt": "tomorrow"}',
        ],
    )
    def test_unmarshal_malformed_raises(self, text):
        """Test malformed persisted text raises DeserializeError."""
        with pytest.raises(DeserializeError):
            XeroSession.unmarshal(text)


class TestAuthorize:
    """Tests for completing the callback on a session."""

    def test_authorize_stores_tokens(self, fake_api, make_provider):
        """Test the code exchange fills the session's tokens."""
        provider = make_provider(fake_api)
        session = provider.begin_auth("state-1")

        access_token = session.authorize(provider, {"code": "auth-code", "state": "state-1"})

        assert access_token == "new-access-token"
        assert session.access_token == "new-access-token"
        assert session.refresh_token == "new-refresh-token"
        assert session.expires_at is not None
        assert fake_api.paths() == ["/connect/token"]
        form = fake_api.form()
        assert form["grant_type"] == "authorization_code"
        assert form["code"] == "auth-code"
        assert form["redirect_uri"] == "https://app.example.com/callback"

    def test_authorize_requires_code(self, fake_api, make_provider):
        """Test a callback without a code fails before any request."""
        provider = make_provider(fake_api)
        session = provider.begin_auth("state-1")

        with pytest.raises(AuthenticationError, match="authorization code"):
            session.authorize(provider, {"state": "state-1"})

        assert fake_api.requests == []

    def test_authorize_surfaces_token_endpoint_status(self, make_provider):
        """Test a rejected code raises UpstreamStatusError and leaves the session untouched."""
        api = FakeXeroAPI(token={"error": "invalid_grant"}, token_status=400)
        provider = make_provider(api)
        session = provider.begin_auth("state-1")

        with pytest.raises(UpstreamStatusError) as exc_info:
            session.authorize(provider, {"code": "bad"})

        assert exc_info.value.status_code == 400
        assert session.access_token == ""
