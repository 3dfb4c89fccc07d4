# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

ResponseFactory = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are keyed by ``"METHOD url"`` or by bare URL; values are either
    an ``HttpResponse`` or a callable producing one from the request.
    """

    def __init__(self, responses: dict[str, HttpResponse | ResponseFactory] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | ResponseFactory, *, method: str | None = None) -> None:
        key = f"{method.upper()} {url}" if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        bare_url = request.url.split("?", 1)[0]
        for key in (f"{request.method} {request.url}", request.url, f"{request.method} {bare_url}", bare_url):
            if key in self._responses:
                found = self._responses[key]
                return found(request) if callable(found) else found
        return HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True
