# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Static API key authentication."""

from __future__ import annotations

from ..http.interceptors import Chain
from ..http.models import HttpResponse

LOCATIONS = ("header", "query")


class ApiKeyAuth:
    """Adds an API key as a header or query parameter.

    Nothing is added until a key is set.
    """

    def __init__(self, location: str = "header", param_name: str = "", api_key: str = "", prefix: str | None = None):
        if location not in LOCATIONS:
            raise ValueError(f"unsupported api key location: {location!r}")
        self.location = location
        self.param_name = param_name
        self.api_key = api_key
        self.prefix = prefix

    def _value(self) -> str:
        if self.prefix:
            return f"{self.prefix} {self.api_key}"
        return self.api_key

    def intercept(self, chain: Chain) -> HttpResponse:
        request = chain.request
        if self.api_key:
            if self.location == "query":
                request = request.with_query_param(self.param_name, self._value())
            else:
                request = request.with_header(self.param_name, self._value())
        return chain.proceed(request)

    def __repr__(self) -> str:
        return f"ApiKeyAuth(location={self.location!r}, param_name={self.param_name!r})"
