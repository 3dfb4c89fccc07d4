# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from petstore_client.http import HttpResponse


@pytest.fixture(autouse=True)
def _clean_petstore_env(monkeypatch):
    for name in (
        "PETSTORE_BASE_URL",
        "PETSTORE_HTTP_TIMEOUT",
        "PETSTORE_HTTP_CONNECT_TIMEOUT",
        "PETSTORE_HTTP_VERIFY_SSL",
        "PETSTORE_HTTP_REDIRECTS",
        "PETSTORE_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


def make_json_response(payload, status_code=200, url=None):
    text = json.dumps(payload)
    return HttpResponse(
        ok=True,
        status_code=status_code,
        headers={"Content-Type": "application/json"},
        text=text,
        content=text.encode("utf-8"),
        url=url,
    )


@pytest.fixture
def json_response():
    return make_json_response
