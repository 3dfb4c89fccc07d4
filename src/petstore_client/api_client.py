# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Client assembly for the Petstore service interfaces.

``ApiClient`` gathers configuration (base URL, transport builder, converters,
call adapters), keeps a registry of named authorization interceptors and
produces service clients bound to a freshly built transport.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Iterable, Mapping, Sequence
from contextlib import suppress
from types import MappingProxyType
from typing import TypeVar

from .auth.oauth import AccessTokenListener, AuthenticationRequestBuilder, OAuth, TokenRequestBuilder
from .auth.schemes import resolve_auth_schemes
from .config import default_base_path, normalize_base_url
from .converters import ConverterFactory, default_converter_factories
from .errors import DuplicateAuthorizationError
from .http.client import HttpClient
from .http.interceptors import Interceptor
from .http.logging_interceptor import HttpLoggingInterceptor, Level, LogSink
from .http.transport import TransportBuilder
from .serializer import Serializer, default_serializer
from .service import CallAdapterFactory, create_service

logger = logging.getLogger(__name__)

S = TypeVar("S")


class ApiClient:
    """
    Builds service clients for the Petstore API.

    Args:
        base_url: API root; defaults to ``PETSTORE_BASE_URL`` or the public
            Petstore host. A trailing ``/`` is appended when missing.
        transport_builder: Builder used for every service client. When given,
            the HTTP logging interceptor is not installed.
        serializer: JSON codec used by the default converter stack.
        call_factory: Prebuilt client used instead of ``transport_builder.build()``.
        call_adapter_factories: Consulted before the built-in adapters.
        converter_factories: Defaults to scalars followed by JSON.
        auth_names: Security scheme names to register, in order.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport_builder: TransportBuilder | None = None,
        serializer: Serializer | None = None,
        call_factory: HttpClient | None = None,
        call_adapter_factories: Sequence[CallAdapterFactory] = (),
        converter_factories: Sequence[ConverterFactory] | None = None,
        auth_names: Iterable[str] | None = None,
    ):
        self.base_url = normalize_base_url(base_url if base_url is not None else default_base_path())
        self.serializer = serializer or default_serializer
        self.call_factory = call_factory
        self.call_adapter_factories: tuple[CallAdapterFactory, ...] = tuple(call_adapter_factories)
        if converter_factories is None:
            converter_factories = default_converter_factories(self.serializer)
        self.converter_factories: tuple[ConverterFactory, ...] = tuple(converter_factories)
        self.logger: LogSink | None = None

        if transport_builder is not None:
            self.transport_builder = transport_builder
        else:
            self.transport_builder = TransportBuilder()
            self.transport_builder.add_interceptor(HttpLoggingInterceptor(self._log_line, level=Level.BODY))

        self._authorizations: dict[str, Interceptor] = {}
        self._oauth: OAuth | None = None
        self._built_clients: weakref.WeakSet[HttpClient] = weakref.WeakSet()
        self._built_lock = threading.Lock()

        if auth_names is not None:
            resolved = resolve_auth_schemes(auth_names)
            seen: set[str] = set()
            for name, _ in resolved:
                if name in seen:
                    raise DuplicateAuthorizationError(name)
                seen.add(name)
            for name, authorization in resolved:
                self.add_authorization(name, authorization)

    @classmethod
    def with_credentials(
        cls,
        auth_name: str,
        client_id: str,
        secret: str,
        username: str,
        password: str,
        **kwargs,
    ) -> ApiClient:
        """Client for a single scheme with the OAuth token endpoint pre-filled."""
        client = cls(auth_names=[auth_name], **kwargs)
        token_endpoint = client.get_token_endpoint()
        if token_endpoint is not None:
            token_endpoint.client_id = client_id
            token_endpoint.client_secret = secret
            token_endpoint.username = username
            token_endpoint.password = password
        return client

    def _log_line(self, line: str) -> None:
        if self.logger is not None:
            self.logger(line)

    @property
    def authorizations(self) -> Mapping[str, Interceptor]:
        """Read-only view of registered authorizations, in registration order."""
        return MappingProxyType(self._authorizations)

    @property
    def oauth(self) -> OAuth | None:
        """The first registered OAuth authorization, if any."""
        return self._oauth

    def add_authorization(self, auth_name: str, authorization: Interceptor) -> ApiClient:
        """Register ``authorization`` under ``auth_name`` and append it to the interceptor chain."""
        if auth_name in self._authorizations:
            raise DuplicateAuthorizationError(auth_name)
        self._authorizations[auth_name] = authorization
        if self._oauth is None and isinstance(authorization, OAuth):
            self._oauth = authorization
        self.transport_builder.add_interceptor(authorization)
        logger.debug("registered authorization %s (%s)", auth_name, type(authorization).__name__)
        return self

    def get_token_endpoint(self) -> TokenRequestBuilder | None:
        """Token request builder of the first OAuth authorization (there should be only one)."""
        if self._oauth is None:
            return None
        return self._oauth.token_request_builder

    def get_authorization_endpoint(self) -> AuthenticationRequestBuilder | None:
        """Authentication request builder of the first OAuth authorization (there should be only one)."""
        if self._oauth is None:
            return None
        return self._oauth.authentication_request_builder

    def set_access_token(self, access_token: str) -> ApiClient:
        """Pre-set the access token of the first OAuth authorization."""
        if self._oauth is not None:
            self._oauth.set_access_token(access_token)
        return self

    def configure_authorization_flow(self, client_id: str, client_secret: str, redirect_uri: str) -> ApiClient:
        """Configure the accessCode/implicit flow parameters."""
        if self._oauth is not None:
            token_endpoint = self._oauth.token_request_builder
            token_endpoint.client_id = client_id
            token_endpoint.client_secret = client_secret
            token_endpoint.redirect_uri = redirect_uri
            auth_endpoint = self._oauth.authentication_request_builder
            if auth_endpoint is not None:
                auth_endpoint.client_id = client_id
                auth_endpoint.redirect_uri = redirect_uri
        return self

    def register_access_token_listener(self, listener: AccessTokenListener) -> ApiClient:
        """Notify ``listener`` whenever the OAuth authorization receives a new token."""
        if self._oauth is not None:
            self._oauth.register_access_token_listener(listener)
        return self

    def set_logger(self, logger: LogSink) -> ApiClient:
        """Receive raw HTTP log lines from the default transport."""
        self.logger = logger
        return self

    def create_service(self, service_type: type[S]) -> S:
        """Return a client implementing ``service_type`` on a newly built transport."""
        if self.call_factory is not None:
            client = self.call_factory
        else:
            client = self.transport_builder.build()
            with self._built_lock:
                self._built_clients.add(client)
        return create_service(
            service_type,
            base_url=self.base_url,
            client=client,
            converter_factories=self.converter_factories,
            call_adapter_factories=self.call_adapter_factories,
        )

    def close(self) -> None:
        """Close live transports built by ``create_service`` and the OAuth token clients.

        A supplied call factory is left open.
        """
        with self._built_lock:
            clients = list(self._built_clients)
            self._built_clients.clear()
        for client in clients:
            with suppress(Exception):
                client.close()
        for authorization in self._authorizations.values():
            if isinstance(authorization, OAuth):
                with suppress(Exception):
                    authorization.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["ApiClient"]
