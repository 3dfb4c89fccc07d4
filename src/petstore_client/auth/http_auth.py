# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP basic and bearer authentication interceptors."""

from __future__ import annotations

import base64

from ..http.interceptors import Chain
from ..http.models import HttpResponse


class HttpBasicAuth:
    def __init__(self, username: str | None = None, password: str | None = None):
        self.username = username
        self.password = password

    def set_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def intercept(self, chain: Chain) -> HttpResponse:
        request = chain.request
        if request.header("Authorization") is None and self.username is not None:
            raw = f"{self.username}:{self.password or ''}".encode("utf-8")
            request = request.with_header("Authorization", "Basic " + base64.b64encode(raw).decode("ascii"))
        return chain.proceed(request)


class HttpBearerAuth:
    def __init__(self, scheme: str = "Bearer", bearer_token: str | None = None):
        self.scheme = scheme
        self.bearer_token = bearer_token

    def intercept(self, chain: Chain) -> HttpResponse:
        request = chain.request
        if request.header("Authorization") is None and self.bearer_token:
            # Schemes are matched case-insensitively, but many servers expect "Bearer".
            scheme = "Bearer" if self.scheme.lower() == "bearer" else self.scheme
            request = request.with_header("Authorization", f"{scheme} {self.bearer_token}")
        return chain.proceed(request)


__all__ = ["HttpBasicAuth", "HttpBearerAuth"]
