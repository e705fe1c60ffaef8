"""The closed value variant and the conversion boundary to and from native
Python objects.

`to_value` is the only place that inspects arbitrary Python types; everything
past it (the encoder in particular) works on the closed set of value classes.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping, Sequence
from typing import Any, Union

from resp3kit.boolean import Boolean
from resp3kit.constants import MIXED_SIMPLE_STRING_MAX_BYTES, SIMPLE_STRING_MAX_BYTES
from resp3kit.dictionary import KeyKind, Map
from resp3kit.errors import UnsupportedTypeError
from resp3kit.floats import Float
from resp3kit.integers import Integer
from resp3kit.itf.encodable import Encodable
from resp3kit.null import Null, NullType
from resp3kit.sequences import Array
from resp3kit.string import (
    ERROR_TYPES,
    BlobError,
    BulkString,
    SimpleError,
    SimpleString,
    VerbatimString,
    byte_length,
)
from resp3kit.struct import is_record, project_fields

Value = Union[
    SimpleString,
    BulkString,
    VerbatimString,
    Integer,
    Float,
    Boolean,
    NullType,
    SimpleError,
    BlobError,
    Array,
    Map,
]

VALUE_TYPES = (
    SimpleString,
    BulkString,
    VerbatimString,
    Integer,
    Float,
    Boolean,
    NullType,
    SimpleError,
    BlobError,
    Array,
    Map,
)

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_MS = datetime.timedelta(milliseconds=1)


def is_value(obj: Any) -> bool:
    return isinstance(obj, VALUE_TYPES)


def text_value(text: str, limit: int = SIMPLE_STRING_MAX_BYTES) -> Union[SimpleString, BulkString]:
    """Short text becomes a Simple String, anything longer a Bulk String."""
    if byte_length(text) <= limit:
        return SimpleString(text)
    return BulkString(text)


def epoch_millis(moment: datetime.datetime) -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    return (moment - _EPOCH) // _ONE_MS


def _is_homogeneous(items: Sequence) -> bool:
    return len({type(item) for item in items}) <= 1


def _sequence_value(items: Sequence) -> Array:
    if _is_homogeneous(items):
        return Array(to_value(item) for item in items)
    # Strings inside a heterogeneous sequence use the tighter threshold
    return Array(
        text_value(item, MIXED_SIMPLE_STRING_MAX_BYTES)
        if isinstance(item, str) and not is_value(item)
        else to_value(item)
        for item in items
    )


def _map_key(key: Any) -> Any:
    if isinstance(key, str) and not is_value(key):
        return SimpleString(key)
    return to_value(key)


def to_value(obj: Any) -> Value:
    """Convert a native Python object into a value.

    Rules, in priority order: values pass through; ``str`` by length;
    ``bytes`` as Bulk String; ``int``; ``float``; ``bool``; ``None``;
    exceptions as Simple Error; sequences as Array; mappings as Map;
    ``datetime`` as epoch milliseconds; records as Map of their fields.

    Raises:
        UnsupportedTypeError: no rule matches the object's type.
    """
    if is_value(obj):
        return obj
    if isinstance(obj, str):
        return text_value(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BulkString(bytes(obj).decode("utf-8", "surrogateescape"))
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        try:
            return Integer(obj)
        except ValueError as e:
            raise UnsupportedTypeError(f"unsupported type: {type(obj).__name__} ({e})") from e
    if isinstance(obj, float):
        return Float(obj)
    if obj is None:
        return Null
    if isinstance(obj, BaseException):
        return SimpleError(str(obj))
    if isinstance(obj, Sequence):
        return _sequence_value(obj)
    if isinstance(obj, Mapping):
        return Map(((_map_key(k), to_value(v)) for k, v in obj.items()))
    if isinstance(obj, datetime.datetime):
        return Integer(epoch_millis(obj))
    if isinstance(obj, Encodable) and not isinstance(obj, type):
        return to_value(obj.to_value())
    if is_record(obj):
        return project_fields(obj)
    raise UnsupportedTypeError(f"unsupported type: {type(obj).__name__}")


def to_native(value: Any) -> Any:
    """Project a value back onto plain Python objects.

    Text becomes ``str``, Integer ``int``, Float ``float``, Boolean ``bool``,
    Null ``None``, Array ``list`` and Map ``dict``. Error values become
    `ReplyError` instances. Non-value input is returned unchanged.
    """
    if isinstance(value, ERROR_TYPES):
        return value.to_exception()
    if isinstance(value, str):
        return str(value)
    if isinstance(value, Boolean):
        return bool(value)
    if isinstance(value, Integer):
        return int(value)
    if isinstance(value, Float):
        return float(value)
    if isinstance(value, NullType):
        return None
    if isinstance(value, Array):
        return [to_native(v) for v in value]
    if isinstance(value, Map):
        if value.key_kind is KeyKind.MIXED:
            # Native keys must stay hashable
            return {_native_key(k): to_native(v) for k, v in value.items()}
        return {to_native(k): to_native(v) for k, v in value.items()}
    return value


def _native_key(key: Any) -> Any:
    if isinstance(key, Array):
        return tuple(_native_key(k) for k in key)
    if isinstance(key, Map):
        return frozenset((_native_key(k), _native_key(v)) for k, v in key.items())
    return to_native(key)
