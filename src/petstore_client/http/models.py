# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by transports, interceptors and services."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

Headers = dict[str, str]


@dataclass(frozen=True)
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    Requests are immutable; interceptors derive modified copies through the
    ``with_*`` helpers and hand them to ``Chain.proceed``.
    """

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = True

    def header(self, name: str) -> str | None:
        headers = httpx.Headers(self.headers)
        # Empty-valued headers still count as present.
        return headers[name] if name in headers else None

    def with_header(self, name: str, value: str) -> HttpRequest:
        """Return a copy with ``name`` set, replacing any existing value case-insensitively."""
        lower = name.lower()
        headers = {key: val for key, val in self.headers.items() if key.lower() != lower}
        headers[name] = value
        return replace(self, headers=headers)

    def with_query_param(self, name: str, value: str) -> HttpRequest:
        parts = urlsplit(self.url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append((name, value))
        url = urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
        return replace(self, url=url)

    @property
    def body_bytes(self) -> bytes:
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return bytes(self.body)


@dataclass
class HttpResponse:
    """Normalized HTTP response.

    ``ok`` reports whether a response was received at all; ``is_successful``
    reports whether the status code is in the 2xx range.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    reason: str = ""
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def header(self, name: str, default: str = "") -> str:
        return httpx.Headers(self.headers).get(name, default)
