# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Converter factories turning bodies into Python values and back.

Factories are consulted in order; the first one returning a converter for a
type handles it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from .errors import ServiceDefinitionError
from .http.models import HttpResponse
from .serializer import Serializer, default_serializer

ResponseBodyConverter = Callable[[HttpResponse], Any]
RequestBodyConverter = Callable[[Any], tuple[bytes, str]]

TEXT_PLAIN = "text/plain; charset=UTF-8"
APPLICATION_JSON = "application/json; charset=UTF-8"


class ConverterFactory(Protocol):
    def response_body_converter(self, type_: Any) -> ResponseBodyConverter | None: ...

    def request_body_converter(self, type_: Any) -> RequestBodyConverter | None: ...


def _parse_bool(text: str) -> bool:
    return text.strip().lower() == "true"


class ScalarsConverterFactory:
    """Plain-text conversion for ``str``, ``bytes`` and numeric/boolean scalars."""

    _parsers: dict[type, Callable[[HttpResponse], Any]] = {
        str: lambda response: response.text,
        bytes: lambda response: response.content,
        int: lambda response: int(response.text.strip()),
        float: lambda response: float(response.text.strip()),
        bool: lambda response: _parse_bool(response.text),
    }

    def response_body_converter(self, type_: Any) -> ResponseBodyConverter | None:
        return self._parsers.get(type_)

    def request_body_converter(self, type_: Any) -> RequestBodyConverter | None:
        if type_ is bytes:
            return lambda value: (bytes(value), "application/octet-stream")
        if type_ is bool:
            return lambda value: (("true" if value else "false").encode("utf-8"), TEXT_PLAIN)
        if type_ in (str, int, float):
            return lambda value: (str(value).encode("utf-8"), TEXT_PLAIN)
        return None


class JsonConverterFactory:
    """JSON conversion for everything else; place it last."""

    def __init__(self, serializer: Serializer | None = None):
        self.serializer = serializer or default_serializer

    def response_body_converter(self, type_: Any) -> ResponseBodyConverter | None:
        serializer = self.serializer

        def convert(response: HttpResponse) -> Any:
            if not response.content.strip():
                return None
            return serializer.loads(response.content, type_)

        return convert

    def request_body_converter(self, type_: Any) -> RequestBodyConverter | None:
        serializer = self.serializer
        return lambda value: (serializer.dumps(value).encode("utf-8"), APPLICATION_JSON)


def default_converter_factories(serializer: Serializer | None = None) -> list[ConverterFactory]:
    return [ScalarsConverterFactory(), JsonConverterFactory(serializer)]


def find_response_converter(factories: Sequence[ConverterFactory], type_: Any) -> ResponseBodyConverter:
    for factory in factories:
        converter = factory.response_body_converter(type_)
        if converter is not None:
            return converter
    raise ServiceDefinitionError(f"no response converter registered for {type_!r}")


def find_request_converter(factories: Sequence[ConverterFactory], type_: Any) -> RequestBodyConverter:
    for factory in factories:
        converter = factory.request_body_converter(type_)
        if converter is not None:
            return converter
    raise ServiceDefinitionError(f"no request body converter registered for {type_!r}")


__all__ = [
    "ConverterFactory",
    "JsonConverterFactory",
    "RequestBodyConverter",
    "ResponseBodyConverter",
    "ScalarsConverterFactory",
    "default_converter_factories",
    "find_request_converter",
    "find_response_converter",
]
