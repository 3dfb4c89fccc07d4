# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the Petstore client."""

import os
from dataclasses import dataclass

from .version import __version__

BASE_URL_ENV = "PETSTORE_BASE_URL"
FALLBACK_BASE_URL = "http://petstore.swagger.io/v2"
DEFAULT_USER_AGENT = f"petstore-client/{__version__}/python"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def default_base_path() -> str:
    """Base URL from the environment, falling back to the public Petstore host."""
    value = (os.getenv(BASE_URL_ENV) or "").strip()
    return value or FALLBACK_BASE_URL


def normalize_base_url(base_url: str) -> str:
    """Ensure the base URL ends with a single trailing slash so relative paths resolve under it."""
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


@dataclass
class ClientSettings:
    """Transport defaults applied to the httpx-backed client."""

    timeout: float = 30.0
    connect_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("PETSTORE_HTTP_TIMEOUT", cls.timeout),
            connect_timeout=_float_env("PETSTORE_HTTP_CONNECT_TIMEOUT", cls.connect_timeout),
            user_agent=os.getenv("PETSTORE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("PETSTORE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("PETSTORE_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
