# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""OAuth2 bearer-token interceptor with token-endpoint acquisition and refresh.

Token and authorization endpoints are described by two mutable request
builders. The interceptor fetches a token from the token endpoint when it has
none, attaches it as ``Authorization: Bearer``, and on a 401/403 refreshes the
token once and replays the request.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..errors import OAuthError
from ..http.client import HttpClient, create_default_http_client
from ..http.interceptors import Chain
from ..http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class OAuthFlow(str, Enum):
    ACCESS_CODE = "accessCode"
    IMPLICIT = "implicit"
    PASSWORD = "password"
    APPLICATION = "application"
    AUTHORIZATION_CODE = "authorizationCode"
    CLIENT_CREDENTIALS = "clientCredentials"


class GrantType(str, Enum):
    AUTHORIZATION_CODE = "authorization_code"
    IMPLICIT = "implicit"
    PASSWORD = "password"
    CLIENT_CREDENTIALS = "client_credentials"
    REFRESH_TOKEN = "refresh_token"


_FLOW_GRANTS: dict[OAuthFlow, GrantType] = {
    OAuthFlow.ACCESS_CODE: GrantType.AUTHORIZATION_CODE,
    OAuthFlow.AUTHORIZATION_CODE: GrantType.AUTHORIZATION_CODE,
    OAuthFlow.IMPLICIT: GrantType.IMPLICIT,
    OAuthFlow.PASSWORD: GrantType.PASSWORD,
    OAuthFlow.APPLICATION: GrantType.CLIENT_CREDENTIALS,
    OAuthFlow.CLIENT_CREDENTIALS: GrantType.CLIENT_CREDENTIALS,
}


def grant_type_for(flow: OAuthFlow) -> GrantType:
    return _FLOW_GRANTS[flow]


@dataclass
class TokenRequestBuilder:
    """Parameters of a token-endpoint request; mutate in place to configure."""

    token_url: str = ""
    grant_type: GrantType | None = None
    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    username: str | None = None
    password: str | None = None
    scope: str | None = None
    code: str | None = None
    refresh_token: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def body_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.grant_type is not None:
            params["grant_type"] = GrantType(self.grant_type).value
        for name in ("client_id", "client_secret", "redirect_uri", "username", "password", "scope", "code", "refresh_token"):
            value = getattr(self, name)
            if value is not None:
                params[name] = value
        params.update(self.extra)
        return params

    def build_request(self) -> HttpRequest:
        return HttpRequest(
            url=self.token_url,
            method="POST",
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Accept": "application/json",
            },
            body=urlencode(self.body_params()),
        )


@dataclass
class AuthenticationRequestBuilder:
    """Parameters of the user-facing authorization redirect."""

    authorization_url: str = ""
    client_id: str | None = None
    redirect_uri: str | None = None
    response_type: str | None = None
    scope: str | None = None
    state: str | None = None

    def location_uri(self) -> str:
        """Authorization URL with the configured parameters appended to its query."""
        parts = urlsplit(self.authorization_url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        for name in ("response_type", "client_id", "redirect_uri", "scope", "state"):
            value = getattr(self, name)
            if value is not None:
                query.append((name, value))
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


@dataclass
class OAuthToken:
    access_token: str
    token_type: str | None = None
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> OAuthToken:
        expires_in = data.get("expires_in")
        return cls(
            access_token=str(data["access_token"]),
            token_type=data.get("token_type"),
            expires_in=int(expires_in) if expires_in not in (None, "") else None,
            refresh_token=data.get("refresh_token"),
            scope=data.get("scope"),
            raw=dict(data),
        )


AccessTokenListener = Callable[[OAuthToken], None]


def _parse_token_payload(response: HttpResponse) -> dict[str, Any]:
    content_type = response.header("content-type").lower()
    if "application/x-www-form-urlencoded" in content_type or "text/plain" in content_type:
        return dict(parse_qsl(response.text))
    try:
        data = json.loads(response.text or "{}")
    except json.JSONDecodeError as exc:
        raise OAuthError(f"token endpoint returned invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise OAuthError("token endpoint returned a non-object payload")
    return data


class OAuth:
    """OAuth2 interceptor.

    Args:
        flow: Flow used to derive the token request grant type.
        authorization_url: Authorization endpoint for code and implicit flows.
        token_url: Token endpoint; when empty no token is ever fetched.
        scopes: Scope string sent to both endpoints.
        token_client: Client used to call the token endpoint. Defaults to a
            fresh httpx-backed client created on first use and
            released by ``close``.
    """

    def __init__(
        self,
        flow: OAuthFlow | None = None,
        authorization_url: str = "",
        token_url: str = "",
        scopes: str | None = None,
        *,
        token_request_builder: TokenRequestBuilder | None = None,
        token_client: HttpClient | None = None,
    ):
        self.token_request_builder = token_request_builder or TokenRequestBuilder(token_url=token_url, scope=scopes)
        self.authentication_request_builder: AuthenticationRequestBuilder | None = None
        if authorization_url:
            self.authentication_request_builder = AuthenticationRequestBuilder(authorization_url=authorization_url, scope=scopes)
        if flow is not None:
            self.set_flow(flow)
        self.access_token: str | None = None
        self.access_token_listener: AccessTokenListener | None = None
        self._token_client = token_client
        self._owns_token_client = token_client is None
        self._lock = threading.Lock()

    def set_flow(self, flow: OAuthFlow) -> None:
        self.token_request_builder.grant_type = grant_type_for(OAuthFlow(flow))

    def set_access_token(self, access_token: str | None) -> None:
        self.access_token = access_token

    def register_access_token_listener(self, listener: AccessTokenListener) -> None:
        self.access_token_listener = listener

    def intercept(self, chain: Chain) -> HttpResponse:
        return self._intercept(chain, retry_on_auth_failure=True)

    def _intercept(self, chain: Chain, *, retry_on_auth_failure: bool) -> HttpResponse:
        request = chain.request
        if request.header("Authorization") is not None:
            return chain.proceed(request)

        if self.access_token is None:
            self.update_access_token(None)

        token = self.access_token
        if token is None:
            return chain.proceed(request)

        response = chain.proceed(request.with_header("Authorization", f"Bearer {token}"))
        if response.status_code in (401, 403) and retry_on_auth_failure:
            logger.debug("authorization rejected with %s; refreshing access token", response.status_code)
            if self.update_access_token(token):
                return self._intercept(chain, retry_on_auth_failure=False)
        return response

    def update_access_token(self, request_access_token: str | None) -> bool:
        """Fetch a new token unless another caller already replaced ``request_access_token``.

        Returns True when the held token differs from ``request_access_token``
        (or no token could be obtained), meaning a replay may succeed.
        """
        with self._lock:
            if self.access_token is None or self.access_token == request_access_token:
                token = self._fetch_token()
                if token is not None:
                    self.access_token = token.access_token
                    if self.access_token_listener is not None:
                        self.access_token_listener(token)
            return self.access_token is None or self.access_token != request_access_token

    def _fetch_token(self) -> OAuthToken | None:
        builder = self.token_request_builder
        if not builder.token_url:
            logger.debug("no token endpoint configured; skipping token request")
            return None

        if self._token_client is None:
            self._token_client = create_default_http_client()
        response = self._token_client.request(builder.build_request())
        if not response.ok:
            raise OAuthError(
                f"token request to {builder.token_url} failed: {response.error_message}",
                error_type=response.error_type,
            )

        payload = _parse_token_payload(response)
        if not response.is_successful:
            error = payload.get("error", f"HTTP {response.status_code}")
            description = payload.get("error_description")
            message = f"token endpoint error '{error}'" + (f": {description}" if description else "")
            raise OAuthError(message)
        if not payload.get("access_token"):
            logger.warning("token endpoint %s returned no access_token", builder.token_url)
            return None
        logger.debug("access token received from %s", builder.token_url)
        return OAuthToken.from_mapping(payload)

    def close(self) -> None:
        """Close the token client if it was created here; a supplied client is left open."""
        with self._lock:
            client, owned = self._token_client, self._owns_token_client
            if owned:
                self._token_client = None
        if owned and client is not None:
            client.close()

    def __repr__(self) -> str:
        return f"OAuth(token_url={self.token_request_builder.token_url!r})"


__all__ = [
    "AccessTokenListener",
    "AuthenticationRequestBuilder",
    "GrantType",
    "OAuth",
    "OAuthFlow",
    "OAuthToken",
    "TokenRequestBuilder",
    "grant_type_for",
]
