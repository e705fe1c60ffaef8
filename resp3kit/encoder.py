"""Value to wire text.

Native objects are first converted with `to_value`; after that, encoding is
an exhaustive match over the closed set of value classes.
"""

from __future__ import annotations

from typing import Any, List

from resp3kit.boolean import Boolean
from resp3kit.dictionary import Map
from resp3kit.floats import Float
from resp3kit.integers import Integer
from resp3kit.null import NullType
from resp3kit.sequences import Array
from resp3kit.string import (
    BlobError,
    BulkString,
    SimpleError,
    SimpleString,
    VerbatimString,
)
from resp3kit.value import to_value

CRLF = "\r\n"


def _length_prefixed(tag: str, text: str) -> str:
    size = len(text.encode("utf-8", "surrogateescape"))
    return f"{tag}{size}{CRLF}{text}{CRLF}"


def _encode_into(value: Any, out: List[str]) -> None:
    if isinstance(value, SimpleString):
        out.append(f"+{value}{CRLF}")
    elif isinstance(value, BulkString):
        out.append(_length_prefixed("$", value))
    elif isinstance(value, VerbatimString):
        if not value:
            out.append(f"=0{CRLF}")
        else:
            out.append(_length_prefixed("=", value))
    elif isinstance(value, SimpleError):
        out.append(f"-{value}{CRLF}")
    elif isinstance(value, BlobError):
        out.append(_length_prefixed("!", value))
    elif isinstance(value, Boolean):
        out.append(f"#t{CRLF}" if value else f"#f{CRLF}")
    elif isinstance(value, Integer):
        out.append(f":{int(value)}{CRLF}")
    elif isinstance(value, Float):
        out.append(f",{value.wire_text()}{CRLF}")
    elif isinstance(value, NullType):
        out.append(f"_{CRLF}")
    elif isinstance(value, Array):
        out.append(f"*{len(value)}{CRLF}")
        for item in value:
            _encode_into(item, out)
    elif isinstance(value, Map):
        out.append(f"%{len(value) * 2}{CRLF}")
        for k, v in value.items():
            _encode_into(k, out)
            _encode_into(v, out)
    else:
        # Native objects nested inside hand-built arrays and maps
        _encode_into(to_value(value), out)


def encode(obj: Any) -> str:
    """Encode `obj` into its wire text.

    `obj` may be a value or any native object `to_value` understands.

    Examples:
        >>> encode("hello")
        '+hello\\r\\n'
        >>> encode([1, 2])
        '*2\\r\\n:1\\r\\n:2\\r\\n'
        >>> encode(3.14)
        ',3.140000\\r\\n'

    Raises:
        UnsupportedTypeError: `obj` (or something nested in it) has no
            encoding rule.
    """
    out: List[str] = []
    _encode_into(to_value(obj), out)
    return "".join(out)


def encode_bytes(obj: Any) -> bytes:
    """Like `encode`, returning the UTF-8 bytes that go on the wire."""
    return encode(obj).encode("utf-8", "surrogateescape")
