# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication interceptors."""

from .api_key import ApiKeyAuth
from .http_auth import HttpBasicAuth, HttpBearerAuth
from .oauth import (
    AccessTokenListener,
    AuthenticationRequestBuilder,
    GrantType,
    OAuth,
    OAuthFlow,
    OAuthToken,
    TokenRequestBuilder,
)
from .schemes import AUTH_SCHEMES, resolve_auth_scheme, resolve_auth_schemes

__all__ = [
    "AUTH_SCHEMES",
    "AccessTokenListener",
    "ApiKeyAuth",
    "AuthenticationRequestBuilder",
    "GrantType",
    "HttpBasicAuth",
    "HttpBearerAuth",
    "OAuth",
    "OAuthFlow",
    "OAuthToken",
    "TokenRequestBuilder",
    "resolve_auth_scheme",
    "resolve_auth_schemes",
]
