# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for the Petstore client."""

from __future__ import annotations


class ClientError(Exception):
    """Base client error."""


class UnknownAuthSchemeError(ClientError):
    """Raised when an auth name is not part of the generated scheme table."""

    def __init__(self, auth_name: str):
        super().__init__(f"auth name {auth_name} not found in available auth names")
        self.auth_name = auth_name


class DuplicateAuthorizationError(ClientError):
    """Raised when an auth name is registered twice."""

    def __init__(self, auth_name: str):
        super().__init__(f"auth name {auth_name} already in api authorizations")
        self.auth_name = auth_name


class ServiceDefinitionError(ClientError):
    """A service interface declaration cannot be turned into HTTP calls."""


class TransportError(ClientError):
    """The request produced no HTTP response."""

    def __init__(self, message: str, error_type: str | None = None):
        super().__init__(message)
        self.error_type = error_type


class OAuthError(TransportError):
    """The token endpoint rejected the request or returned an unusable payload."""


class ApiError(ClientError):
    def __init__(self, status_code: int, message: str, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "ApiError",
    "ClientError",
    "DuplicateAuthorizationError",
    "OAuthError",
    "ServiceDefinitionError",
    "TransportError",
    "UnknownAuthSchemeError",
]
