# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request interceptor chain layered on top of an HttpClient."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class Chain(Protocol):
    """View of the remaining interceptor chain handed to each interceptor."""

    @property
    def request(self) -> HttpRequest: ...

    def proceed(self, request: HttpRequest) -> HttpResponse: ...


@runtime_checkable
class Interceptor(Protocol):
    """Inspects or rewrites a request and/or its response.

    Implementations call ``chain.proceed(request)`` exactly once to continue,
    or return a response without proceeding to short-circuit.
    """

    def intercept(self, chain: Chain) -> HttpResponse: ...


class _RealChain:
    def __init__(self, interceptors: Sequence[Interceptor], index: int, request: HttpRequest, client: HttpClient):
        self._interceptors = interceptors
        self._index = index
        self._request = request
        self._client = client

    @property
    def request(self) -> HttpRequest:
        return self._request

    def proceed(self, request: HttpRequest) -> HttpResponse:
        if self._index >= len(self._interceptors):
            return self._client.request(request)
        next_chain = _RealChain(self._interceptors, self._index + 1, request, self._client)
        return self._interceptors[self._index].intercept(next_chain)


class InterceptingHttpClient(HttpClient):
    """HttpClient that runs every request through a fixed interceptor sequence.

    Interceptors run in the order given; the last one hands off to the wrapped client.
    """

    def __init__(self, client: HttpClient, interceptors: Sequence[Interceptor] = ()):
        self._client = client
        self.interceptors: tuple[Interceptor, ...] = tuple(interceptors)

    def request(self, request: HttpRequest) -> HttpResponse:
        return _RealChain(self.interceptors, 0, request, self._client).proceed(request)

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if callable(close):
            close()


__all__ = ["Chain", "InterceptingHttpClient", "Interceptor"]
