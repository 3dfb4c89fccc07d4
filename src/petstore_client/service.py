# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Declarative service interfaces.

A service interface is a plain class whose methods are decorated with an HTTP
verb and whose parameters are annotated with a binding marker::

    class PetApi:
        @get("pet/{petId}")
        def get_pet_by_id(self, pet_id: Annotated[int, Path("petId")]) -> Pet: ...

``create_service`` parses every decorated method up front and returns an
instance of a generated subclass whose methods issue the HTTP calls. The
declared return type picks a call adapter: ``Call[T]`` returns the unexecuted
call, ``ServiceResponse[T]`` returns status plus converted body, and any other
type returns the converted body, raising ``ApiError`` on a non-2xx status.
"""

from __future__ import annotations

import functools
import inspect
import json
import logging
import re
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Generic, Protocol, TypeVar, get_args, get_origin, get_type_hints
from urllib.parse import quote, urlencode

import httpx

from .converters import (
    ConverterFactory,
    RequestBodyConverter,
    ResponseBodyConverter,
    find_request_converter,
    find_response_converter,
)
from .errors import ApiError, ServiceDefinitionError, TransportError
from .http.client import HttpClient
from .http.models import Headers, HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z][A-Za-z0-9_\-]*)\}")
_DOT_SEGMENT_RE = re.compile(r"(.*/)?(\.|%2e){1,2}(/.*)?", re.IGNORECASE)
_ENDPOINT_ATTR = "__service_endpoint__"
_NONE_TYPES = (None, type(None))


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    headers: Headers = field(default_factory=dict)


def endpoint(method: str, path: str, *, headers: Headers | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a service method as issuing ``method`` against ``path`` (relative to the base URL)."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, _ENDPOINT_ATTR, Endpoint(method.upper(), path, dict(headers or {})))
        return func

    return decorator


def get(path: str, *, headers: Headers | None = None):
    return endpoint("GET", path, headers=headers)


def post(path: str, *, headers: Headers | None = None):
    return endpoint("POST", path, headers=headers)


def put(path: str, *, headers: Headers | None = None):
    return endpoint("PUT", path, headers=headers)


def patch(path: str, *, headers: Headers | None = None):
    return endpoint("PATCH", path, headers=headers)


def delete(path: str, *, headers: Headers | None = None):
    return endpoint("DELETE", path, headers=headers)


def head(path: str, *, headers: Headers | None = None):
    return endpoint("HEAD", path, headers=headers)


@dataclass(frozen=True)
class Param:
    kind: ClassVar[str] = ""
    name: str | None = None


@dataclass(frozen=True)
class Path(Param):
    kind: ClassVar[str] = "path"
    encoded: bool = False


@dataclass(frozen=True)
class Query(Param):
    """Query parameter; sequences repeat the key (``multi``) or join with commas (``csv``)."""

    kind: ClassVar[str] = "query"
    collection_format: str = "multi"


@dataclass(frozen=True)
class Header(Param):
    kind: ClassVar[str] = "header"


@dataclass(frozen=True)
class Body(Param):
    kind: ClassVar[str] = "body"


@dataclass(frozen=True)
class Field(Param):
    kind: ClassVar[str] = "field"


@dataclass(frozen=True)
class Part(Param):
    kind: ClassVar[str] = "part"
    content_type: str = "application/octet-stream"


@dataclass
class ServiceResponse(Generic[T]):
    """Status, headers and converted body of a completed call."""

    status_code: int
    headers: Headers
    body: T | None
    raw: HttpResponse
    error_body: str | None = None

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300


class Call(Generic[T]):
    """A prepared request that runs when ``execute`` is called."""

    def __init__(self, request: HttpRequest, client: HttpClient, converter: ResponseBodyConverter):
        self.request = request
        self._client = client
        self._converter = converter

    def execute(self) -> ServiceResponse[T]:
        response = self._client.request(self.request)
        if not response.ok:
            raise TransportError(
                f"{self.request.method} {self.request.url} failed: {response.error_message}",
                error_type=response.error_type,
            )
        status = response.status_code or 0
        if not response.is_successful:
            return ServiceResponse(status, response.headers, None, response, error_body=response.text)
        body = None if status in (204, 205) else self._converter(response)
        return ServiceResponse(status, response.headers, body, response)

    def __repr__(self) -> str:
        return f"Call({self.request.method} {self.request.url})"


class CallAdapter(Protocol):
    response_type: Any

    def adapt(self, call: Call[Any]) -> Any: ...


class CallAdapterFactory(Protocol):
    def get(self, return_type: Any) -> CallAdapter | None: ...


def _error_message(call: Call[Any], response: ServiceResponse[Any]) -> str:
    message = f"{call.request.method} {call.request.url} failed with {response.status_code}"
    try:
        data = json.loads(response.error_body or "")
    except ValueError:
        return message
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return message


@dataclass
class _CallAdapter:
    response_type: Any

    def adapt(self, call: Call[Any]) -> Any:
        return call


@dataclass
class _ResponseAdapter:
    response_type: Any

    def adapt(self, call: Call[Any]) -> Any:
        return call.execute()


@dataclass
class _BodyAdapter:
    response_type: Any

    def adapt(self, call: Call[Any]) -> Any:
        response = call.execute()
        if not response.is_successful:
            raise ApiError(response.status_code, _error_message(call, response), response.error_body)
        return response.body


class BuiltinCallAdapterFactory:
    """Fallback adapters consulted after any user-supplied factories."""

    def get(self, return_type: Any) -> CallAdapter:
        origin = get_origin(return_type)
        if origin is Call or return_type is Call:
            args = get_args(return_type)
            return _CallAdapter(args[0] if args else Any)
        if origin is ServiceResponse or return_type is ServiceResponse:
            args = get_args(return_type)
            return _ResponseAdapter(args[0] if args else Any)
        return _BodyAdapter(return_type)


_BUILTIN_ADAPTERS = BuiltinCallAdapterFactory()


def _param_str(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _strip_optional(type_: Any) -> Any:
    if get_origin(type_) in (typing.Union, types.UnionType):
        args = [arg for arg in get_args(type_) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return type_


def _find_annotated(annotation: Any) -> Any:
    # Python 3.10 wraps ``Annotated[...] = None`` parameters in Optional.
    if get_origin(annotation) is typing.Annotated:
        return annotation
    if get_origin(annotation) in (typing.Union, types.UnionType):
        for arg in get_args(annotation):
            if get_origin(arg) is typing.Annotated:
                return arg
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


@dataclass
class _BoundParam:
    name: str
    marker: Param
    type_: Any
    body_converter: RequestBodyConverter | None = None

    @property
    def wire_name(self) -> str:
        return self.marker.name or self.name


class ServiceMethod:
    """One parsed interface method bound to a client and base URL."""

    def __init__(
        self,
        func: Callable[..., Any],
        endpoint: Endpoint,
        *,
        base_url: str,
        client: HttpClient,
        converter_factories: Sequence[ConverterFactory],
        call_adapter_factories: Sequence[CallAdapterFactory],
    ):
        self.func = func
        self.endpoint = endpoint
        self.base_url = base_url
        self.client = client
        self.signature = inspect.signature(func)
        where = func.__qualname__

        try:
            hints = get_type_hints(func, include_extras=True)
        except Exception as exc:  # noqa: BLE001
            raise ServiceDefinitionError(f"{where}: cannot resolve annotations: {exc}") from exc

        self.params: list[_BoundParam] = []
        for index, (name, parameter) in enumerate(self.signature.parameters.items()):
            if index == 0 and name in ("self", "cls"):
                continue
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                raise ServiceDefinitionError(f"{where}: variadic parameter '{name}' is not supported")
            annotated = _find_annotated(hints.get(name))
            markers = [meta for meta in getattr(annotated, "__metadata__", ()) if isinstance(meta, Param)]
            if len(markers) != 1:
                raise ServiceDefinitionError(
                    f"{where}: parameter '{name}' needs exactly one Path/Query/Header/Body/Field/Part annotation"
                )
            self.params.append(_BoundParam(name, markers[0], _strip_optional(get_args(annotated)[0])))

        kinds = [param.marker.kind for param in self.params]
        if kinds.count("body") > 1:
            raise ServiceDefinitionError(f"{where}: multiple Body parameters")
        if "body" in kinds and ("field" in kinds or "part" in kinds):
            raise ServiceDefinitionError(f"{where}: Body cannot be combined with Field or Part parameters")
        if "field" in kinds and "part" in kinds:
            raise ServiceDefinitionError(f"{where}: Field and Part parameters cannot be mixed")

        placeholders = set(_PLACEHOLDER_RE.findall(endpoint.path))
        bound_paths = {param.wire_name for param in self.params if param.marker.kind == "path"}
        if unknown := bound_paths - placeholders:
            raise ServiceDefinitionError(f"{where}: path parameters {sorted(unknown)} not found in '{endpoint.path}'")
        if missing := placeholders - bound_paths:
            raise ServiceDefinitionError(f"{where}: placeholders {sorted(missing)} in '{endpoint.path}' have no Path parameter")

        for param in self.params:
            if param.marker.kind == "body":
                param.body_converter = find_request_converter(converter_factories, param.type_)

        return_type = hints.get("return", Any)
        adapter: CallAdapter | None = None
        for factory in call_adapter_factories:
            adapter = factory.get(return_type)
            if adapter is not None:
                break
        self.adapter = adapter or _BUILTIN_ADAPTERS.get(return_type)

        response_type = self.adapter.response_type
        if response_type in _NONE_TYPES:
            self.response_converter: ResponseBodyConverter = lambda response: None
        else:
            self.response_converter = find_response_converter(converter_factories, response_type)

    def build_request(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> HttpRequest:
        bound = self.signature.bind(None, *args, **kwargs)
        bound.apply_defaults()
        values = dict(bound.arguments)

        path = self.endpoint.path
        query: list[tuple[str, str]] = []
        headers: Headers = dict(self.endpoint.headers)
        fields: dict[str, Any] = {}
        parts_data: dict[str, Any] = {}
        parts_files: dict[str, Any] = {}
        body: bytes | None = None

        for param in self.params:
            value = values.get(param.name)
            marker = param.marker
            if marker.kind == "path":
                if value is None:
                    raise ValueError(f"path parameter '{param.wire_name}' must not be None")
                raw = ",".join(_param_str(v) for v in value) if _is_sequence(value) else _param_str(value)
                encoded = raw if marker.encoded else quote(raw, safe="")
                if _DOT_SEGMENT_RE.fullmatch(encoded):
                    raise ValueError(f"path parameter '{param.wire_name}' must not be a dot segment: {raw!r}")
                path = path.replace("{" + param.wire_name + "}", encoded)
            elif value is None:
                continue
            elif marker.kind == "query":
                if _is_sequence(value):
                    if marker.collection_format == "csv":
                        query.append((param.wire_name, ",".join(_param_str(v) for v in value)))
                    else:
                        query.extend((param.wire_name, _param_str(v)) for v in value)
                else:
                    query.append((param.wire_name, _param_str(value)))
            elif marker.kind == "header":
                headers[param.wire_name] = _param_str(value)
            elif marker.kind == "body":
                body, content_type = param.body_converter(value)
                if not any(key.lower() == "content-type" for key in headers):
                    headers["Content-Type"] = content_type
            elif marker.kind == "field":
                fields[param.wire_name] = [_param_str(v) for v in value] if _is_sequence(value) else _param_str(value)
            elif marker.kind == "part":
                if isinstance(value, (bytes, bytearray)):
                    parts_files[param.wire_name] = (param.wire_name, bytes(value), marker.content_type)
                elif isinstance(value, tuple):
                    parts_files[param.wire_name] = value
                else:
                    parts_data[param.wire_name] = _param_str(value)

        url = self.base_url + path.lstrip("/")
        if query:
            url += ("&" if "?" in url else "?") + urlencode(query)

        has_form = any(param.marker.kind == "field" for param in self.params)
        has_multipart = any(param.marker.kind == "part" for param in self.params)
        if has_form or has_multipart:
            # httpx owns form and multipart encoding, boundary included.
            encoded = httpx.Request(
                self.endpoint.method,
                url,
                data=fields if has_form else parts_data,
                files=parts_files if has_multipart else None,
            )
            body = encoded.read()
            headers["Content-Type"] = encoded.headers["Content-Type"]

        return HttpRequest(url=url, method=self.endpoint.method, headers=headers, body=body)

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        request = self.build_request(args, kwargs)
        logger.debug("%s -> %s %s", self.func.__qualname__, request.method, request.url)
        return self.adapter.adapt(Call(request, self.client, self.response_converter))


def service_endpoints(service_type: type) -> dict[str, tuple[Callable[..., Any], Endpoint]]:
    """Decorated methods of ``service_type`` (inherited ones included), by attribute name."""
    found: dict[str, tuple[Callable[..., Any], Endpoint]] = {}
    for name, member in inspect.getmembers(service_type, predicate=inspect.isfunction):
        declared = getattr(member, _ENDPOINT_ATTR, None)
        if isinstance(declared, Endpoint):
            found[name] = (member, declared)
    return found


def _make_impl(method: ServiceMethod) -> Callable[..., Any]:
    @functools.wraps(method.func)
    def impl(self, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN001
        return method.invoke(args, kwargs)

    impl.service_method = method  # type: ignore[attr-defined]
    return impl


def create_service(
    service_type: type[T],
    *,
    base_url: str,
    client: HttpClient,
    converter_factories: Sequence[ConverterFactory],
    call_adapter_factories: Sequence[CallAdapterFactory] = (),
) -> T:
    """Return an instance of a generated ``service_type`` subclass bound to ``client``."""
    if not isinstance(service_type, type):
        raise ServiceDefinitionError(f"service interfaces must be classes, got {service_type!r}")
    endpoints = service_endpoints(service_type)
    if not endpoints:
        raise ServiceDefinitionError(f"{service_type.__qualname__} declares no HTTP endpoints")

    namespace: dict[str, Any] = {
        "__module__": service_type.__module__,
        "__qualname__": service_type.__qualname__,
        "__doc__": service_type.__doc__,
    }
    for name, (func, declared) in endpoints.items():
        method = ServiceMethod(
            func,
            declared,
            base_url=base_url,
            client=client,
            converter_factories=converter_factories,
            call_adapter_factories=call_adapter_factories,
        )
        namespace[name] = _make_impl(method)

    generated = type(service_type)(service_type.__name__, (service_type,), namespace)
    return object.__new__(generated)


__all__ = [
    "Body",
    "Call",
    "CallAdapter",
    "CallAdapterFactory",
    "Endpoint",
    "Field",
    "Header",
    "Param",
    "Part",
    "Path",
    "Query",
    "ServiceMethod",
    "ServiceResponse",
    "create_service",
    "delete",
    "endpoint",
    "get",
    "head",
    "patch",
    "post",
    "put",
    "service_endpoints",
]
