# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON serialization of request and response models.

Models are plain dataclasses. A field whose JSON key differs from its Python
name declares it with ``field(metadata={"json": "photoUrls"})``.
"""

from __future__ import annotations

import json
import logging
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import MISSING, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints
from uuid import UUID

logger = logging.getLogger(__name__)

Encoder = Callable[[Any], Any]
Decoder = Callable[[Any], Any]


def _parse_datetime(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _default_adapters() -> dict[type, tuple[Encoder, Decoder]]:
    # datetime must precede date: isinstance checks walk this in order.
    return {
        datetime: (lambda value: value.isoformat(), _parse_datetime),
        date: (lambda value: value.isoformat(), date.fromisoformat),
        UUID: (str, UUID),
        Decimal: (str, lambda value: Decimal(str(value))),
    }


def json_name(f) -> str:
    return f.metadata.get("json", f.name)


class Serializer:
    """Dataclass-aware JSON codec.

    Args:
        serialize_nulls: Emit ``null`` for ``None`` dataclass fields instead of omitting them.
        indent: Passed to ``json.dumps``.
    """

    def __init__(self, *, serialize_nulls: bool = False, indent: int | None = None):
        self.serialize_nulls = serialize_nulls
        self.indent = indent
        self._adapters = _default_adapters()

    def register_type_adapter(self, type_: type, encode: Encoder, decode: Decoder) -> Serializer:
        self._adapters[type_] = (encode, decode)
        return self

    def _adapter_for_value(self, value: Any) -> Encoder | None:
        for type_, (encode, _) in self._adapters.items():
            if isinstance(value, type_):
                return encode
        return None

    def to_primitive(self, value: Any) -> Any:
        if value is None or isinstance(value, (bool, int, float, str)) and not isinstance(value, Enum):
            return value
        encode = self._adapter_for_value(value)
        if encode is not None:
            return encode(value)
        if isinstance(value, Enum):
            return self.to_primitive(value.value)
        if is_dataclass(value) and not isinstance(value, type):
            out: dict[str, Any] = {}
            for f in fields(value):
                item = getattr(value, f.name)
                if item is None and not self.serialize_nulls:
                    continue
                out[json_name(f)] = self.to_primitive(item)
            return out
        if isinstance(value, Mapping):
            return {str(key): self.to_primitive(item) for key, item in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.to_primitive(item) for item in value]
        if isinstance(value, bytes):
            return value.decode("utf-8")
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    def from_primitive(self, data: Any, type_: Any) -> Any:
        if type_ is Any or type_ is object or type_ is None:
            return data
        if data is None:
            return None

        origin = get_origin(type_)
        if origin is typing.Annotated:
            return self.from_primitive(data, get_args(type_)[0])
        if origin is Union or origin is types.UnionType:
            candidates = [arg for arg in get_args(type_) if arg is not type(None)]
            if len(candidates) == 1:
                return self.from_primitive(data, candidates[0])
            for candidate in candidates:
                try:
                    return self.from_primitive(data, candidate)
                except (TypeError, ValueError, KeyError):
                    continue
            return data
        if origin in (list, tuple, set, frozenset) or (origin is not None and origin.__module__ == "collections.abc" and origin.__name__ in {"Sequence", "Iterable"}):
            args = get_args(type_)
            item_type = args[0] if args else Any
            items = [self.from_primitive(item, item_type) for item in data]
            return items if origin not in (tuple, set, frozenset) else origin(items)
        if origin in (dict,) or (origin is not None and getattr(origin, "__name__", "") == "Mapping"):
            args = get_args(type_)
            value_type = args[1] if len(args) == 2 else Any
            return {key: self.from_primitive(item, value_type) for key, item in data.items()}
        if origin is not None:
            return data

        if type_ in self._adapters:
            return self._adapters[type_][1](data)
        if isinstance(type_, type) and issubclass(type_, Enum):
            try:
                return type_(data)
            except ValueError:
                logger.debug("unknown %s value %r decoded as None", type_.__name__, data)
                return None
        if is_dataclass(type_):
            return self._decode_dataclass(data, type_)
        if type_ is bool:
            return bool(data)
        if type_ in (int, float, str):
            return type_(data)
        return data

    def _decode_dataclass(self, data: Any, type_: type) -> Any:
        if not isinstance(data, Mapping):
            raise TypeError(f"expected an object for {type_.__name__}, got {type(data).__name__}")
        hints = get_type_hints(type_)
        kwargs: dict[str, Any] = {}
        for f in fields(type_):
            if not f.init:
                continue
            key = json_name(f)
            if key in data:
                kwargs[f.name] = self.from_primitive(data[key], hints.get(f.name, Any))
            elif f.default is MISSING and f.default_factory is MISSING:
                # Required fields absent from the payload decode as None.
                kwargs[f.name] = None
        return type_(**kwargs)

    def dumps(self, value: Any) -> str:
        return json.dumps(self.to_primitive(value), indent=self.indent, ensure_ascii=False)

    def loads(self, text: str | bytes, type_: Any = Any) -> Any:
        return self.from_primitive(json.loads(text), type_)


default_serializer = Serializer()

__all__ = ["Serializer", "default_serializer", "json_name"]
