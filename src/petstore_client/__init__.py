# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Petstore API client.

``ApiClient`` assembles an httpx-backed transport, attaches authorization
interceptors (OAuth2, API key) and generates implementations of the
declarative service interfaces in ``petstore_client.apis``.
"""

from .api_client import ApiClient
from .apis import PetApi, StoreApi, UserApi
from .auth import ApiKeyAuth, HttpBasicAuth, HttpBearerAuth, OAuth, OAuthFlow, OAuthToken
from .config import ClientSettings, load_client_settings
from .converters import JsonConverterFactory, ScalarsConverterFactory
from .errors import (
    ApiError,
    ClientError,
    DuplicateAuthorizationError,
    OAuthError,
    ServiceDefinitionError,
    TransportError,
    UnknownAuthSchemeError,
)
from .http import HttpClient, HttpLoggingInterceptor, HttpRequest, HttpResponse, Interceptor, TransportBuilder
from .log import setup_logging
from .serializer import Serializer
from .service import Call, ServiceResponse
from .version import __version__

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiKeyAuth",
    "Call",
    "ClientError",
    "ClientSettings",
    "DuplicateAuthorizationError",
    "HttpBasicAuth",
    "HttpBearerAuth",
    "HttpClient",
    "HttpLoggingInterceptor",
    "HttpRequest",
    "HttpResponse",
    "Interceptor",
    "JsonConverterFactory",
    "OAuth",
    "OAuthError",
    "OAuthFlow",
    "OAuthToken",
    "PetApi",
    "ScalarsConverterFactory",
    "Serializer",
    "ServiceDefinitionError",
    "ServiceResponse",
    "StoreApi",
    "TransportBuilder",
    "TransportError",
    "UnknownAuthSchemeError",
    "UserApi",
    "__version__",
    "load_client_settings",
    "setup_logging",
]
