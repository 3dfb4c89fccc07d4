# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire-level logging of requests and responses through a line callback."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from enum import IntEnum

from .interceptors import Chain
from .models import HttpResponse

LogSink = Callable[[str], None]

_BINARY_MARKERS = ("image/", "audio/", "video/", "application/octet-stream", "multipart/")


class Level(IntEnum):
    NONE = 0
    BASIC = 1
    HEADERS = 2
    BODY = 3


def _is_binary(content_type: str) -> bool:
    lowered = content_type.lower()
    return any(marker in lowered for marker in _BINARY_MARKERS)


class HttpLoggingInterceptor:
    """Emit request/response lines at the configured verbosity.

    BASIC logs request and response lines, HEADERS adds headers, BODY adds
    bodies. Binary bodies are summarized by size only.
    """

    def __init__(self, sink: LogSink, level: Level = Level.NONE, redact_headers: Iterable[str] = ()):
        self._sink = sink
        self.level = level
        self._redacted = {name.lower() for name in redact_headers}

    def redact_header(self, name: str) -> HttpLoggingInterceptor:
        self._redacted.add(name.lower())
        return self

    def _header_line(self, name: str, value: str) -> str:
        shown = "██" if name.lower() in self._redacted else value
        return f"{name}: {shown}"

    def intercept(self, chain: Chain) -> HttpResponse:
        request = chain.request
        level = self.level
        if level == Level.NONE:
            return chain.proceed(request)

        log = self._sink
        log_headers = level >= Level.HEADERS
        log_body = level >= Level.BODY
        body = request.body_bytes

        start_line = f"--> {request.method} {request.url}"
        if not log_headers and body:
            start_line += f" ({len(body)}-byte body)"
        log(start_line)

        if log_headers:
            for name, value in request.headers.items():
                log(self._header_line(name, value))
            content_type = next((v for k, v in request.headers.items() if k.lower() == "content-type"), "")
            if not log_body or not body:
                log(f"--> END {request.method}")
            elif _is_binary(content_type):
                log(f"--> END {request.method} (binary {len(body)}-byte body omitted)")
            else:
                log("")
                log(body.decode("utf-8", errors="replace"))
                log(f"--> END {request.method} ({len(body)}-byte body)")

        started = time.monotonic()
        response = chain.proceed(request)
        took_ms = int((time.monotonic() - started) * 1000)

        if not response.ok:
            log(f"<-- HTTP FAILED: {response.error_type or 'Error'}: {response.error_message}")
            return response

        size = len(response.content)
        reason = f" {response.reason}" if response.reason else ""
        suffix = "" if log_headers else f", {size}-byte body"
        log(f"<-- {response.status_code}{reason} {response.url or request.url} ({took_ms}ms{suffix})")

        if log_headers:
            for name, value in response.headers.items():
                log(self._header_line(name, value))
            if not log_body or not size:
                log("<-- END HTTP")
            elif _is_binary(response.header("content-type")):
                log(f"<-- END HTTP (binary {size}-byte body omitted)")
            else:
                log("")
                log(response.text)
                log(f"<-- END HTTP ({size}-byte body)")

        return response


__all__ = ["HttpLoggingInterceptor", "Level", "LogSink"]
