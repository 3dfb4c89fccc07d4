# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .interceptors import Chain, InterceptingHttpClient, Interceptor
from .logging_interceptor import HttpLoggingInterceptor, Level, LogSink
from .models import Headers, HttpRequest, HttpResponse
from .transport import TransportBuilder

__all__ = [
    "Chain",
    "Headers",
    "HttpClient",
    "HttpLoggingInterceptor",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InterceptingHttpClient",
    "Interceptor",
    "Level",
    "LogSink",
    "StubHttpClient",
    "TransportBuilder",
    "create_default_http_client",
]
