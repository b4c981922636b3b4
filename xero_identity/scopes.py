# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Scopes supported by Xero.

See https://developer.xero.com/documentation/guides/oauth2/scopes/
"""

from typing import Iterable

# A refresh token is only issued when offline_access is requested.
SCOPE_OFFLINE_ACCESS = "offline_access"

# OpenID scopes.
SCOPE_OPENID = "openid"
SCOPE_PROFILE = "profile"
SCOPE_EMAIL = "email"

# Accounting scopes.
SCOPE_ACCOUNTING_TRANSACTIONS = "accounting.transactions"
SCOPE_ACCOUNTING_TRANSACTIONS_READ = "accounting.transactions.read"
SCOPE_ACCOUNTING_REPORTS_READ = "accounting.reports.read"
SCOPE_ACCOUNTING_JOURNALS_READ = "accounting.journals.read"
SCOPE_ACCOUNTING_SETTINGS = "accounting.settings"
SCOPE_ACCOUNTING_SETTINGS_READ = "accounting.settings.read"
SCOPE_ACCOUNTING_CONTACTS = "accounting.contacts"
SCOPE_ACCOUNTING_CONTACTS_READ = "accounting.contacts.read"
SCOPE_ACCOUNTING_ATTACHMENTS = "accounting.attachments"
SCOPE_ACCOUNTING_ATTACHMENTS_READ = "accounting.attachments.read"

DEFAULT_SCOPES = (
    SCOPE_OPENID,
    SCOPE_PROFILE,
    SCOPE_EMAIL,
    SCOPE_OFFLINE_ACCESS,
    SCOPE_ACCOUNTING_SETTINGS_READ,
)


def scopes_to_strings(*scopes: str) -> list[str]:
    """Format scopes for the authorization request.

    Xero expects every scope token followed by a single space; the tokens
    are kept that way on the wire.
    """
    return [f"{scope} " for scope in scopes]


def join_scopes(scopes: Iterable[str]) -> str:
    """Join already formatted scope tokens into the ``scope`` parameter value."""
    return " ".join(scopes)
