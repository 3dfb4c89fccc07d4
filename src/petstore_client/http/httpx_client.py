# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import ClientSettings, load_client_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_client_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=httpx.Timeout(self.settings.timeout, connect=self.settings.connect_timeout),
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not any(key.lower() == "user-agent" for key in headers):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        started = time.monotonic()
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            )
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=resp.text,
            content=resp.content,
            url=str(resp.url),
            reason=resp.reason_phrase,
            meta={"elapsed_ms": int((time.monotonic() - started) * 1000)},
        )

    def close(self) -> None:
        self._client.close()
