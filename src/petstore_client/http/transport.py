# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Two-phase transport assembly: gather interceptors, then build an immutable client."""

from __future__ import annotations

from ..config import ClientSettings, load_client_settings
from .client import HttpClient
from .interceptors import InterceptingHttpClient, Interceptor


class TransportBuilder:
    """Collects settings and interceptors for the clients handed to services.

    ``base_client`` replaces the httpx-backed client (handy for tests and for
    sharing one connection pool across builds). Every ``build()`` snapshots the
    interceptors registered so far.
    """

    def __init__(self, settings: ClientSettings | None = None, base_client: HttpClient | None = None):
        self.settings = settings or load_client_settings()
        self.base_client = base_client
        self._interceptors: list[Interceptor] = []

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._interceptors)

    def add_interceptor(self, interceptor: Interceptor) -> TransportBuilder:
        self._interceptors.append(interceptor)
        return self

    def build(self) -> InterceptingHttpClient:
        if self.base_client is not None:
            client = self.base_client
        else:
            from .httpx_client import HttpxClient

            client = HttpxClient(self.settings)
        return InterceptingHttpClient(client, self._interceptors)


__all__ = ["TransportBuilder"]
