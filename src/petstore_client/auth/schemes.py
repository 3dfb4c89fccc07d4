# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Security schemes declared by the Petstore API, keyed by name."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from ..errors import UnknownAuthSchemeError
from ..http.interceptors import Interceptor
from .api_key import ApiKeyAuth
from .oauth import OAuth, OAuthFlow

PETSTORE_AUTHORIZATION_URL = "http://petstore.swagger.io/api/oauth/dialog"
PETSTORE_SCOPES = "write:pets, read:pets"

AuthFactory = Callable[[], Interceptor]

AUTH_SCHEMES: dict[str, AuthFactory] = {
    "petstore_auth": lambda: OAuth(OAuthFlow.IMPLICIT, PETSTORE_AUTHORIZATION_URL, "", PETSTORE_SCOPES),
    "api_key": lambda: ApiKeyAuth("header", "api_key"),
}


def resolve_auth_scheme(auth_name: str) -> Interceptor:
    """Instantiate the interceptor registered for ``auth_name``."""
    try:
        factory = AUTH_SCHEMES[auth_name]
    except KeyError:
        raise UnknownAuthSchemeError(auth_name) from None
    return factory()


def resolve_auth_schemes(auth_names: Iterable[str]) -> list[tuple[str, Interceptor]]:
    """Resolve every name up front so an unknown one fails before anything is registered."""
    return [(name, resolve_auth_scheme(name)) for name in auth_names]


__all__ = ["AUTH_SCHEMES", "AuthFactory", "resolve_auth_scheme", "resolve_auth_schemes"]
