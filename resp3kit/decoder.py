"""Streaming decoder: wire bytes to values.

A call either returns one complete value or raises:

- `PartialInputError` when the source holds only part of a record. The
  reader is rewound to the record's first byte; feed more bytes and call
  `decode` again.
- `EndOfInputError` when the source was empty where a record would start.
- `MalformedWireError` when the bytes violate the grammar.

Nothing is resumed mid-record: a retry always starts again from the tag byte.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterator, List, Tuple, Union

from resp3kit import config
from resp3kit.boolean import Boolean
from resp3kit.constants import (
    CRLF,
    INT64_MAX,
    INT64_MIN,
    MAX_AGGREGATE_LENGTH,
    MAX_BULK_LENGTH,
    TAG_ARRAY,
    TAG_BLOB_ERROR,
    TAG_BOOLEAN,
    TAG_BULK_STRING,
    TAG_FLOAT,
    TAG_INTEGER,
    TAG_MAP,
    TAG_NULL,
    TAG_SIMPLE_ERROR,
    TAG_SIMPLE_STRING,
    TAG_VERBATIM_STRING,
)
from resp3kit.dictionary import resolve_map
from resp3kit.errors import (
    ERR_BAD_FLOAT,
    ERR_BAD_INTEGER,
    ERR_BAD_LENGTH,
    ERR_BAD_TERMINATOR,
    ERR_LIMIT,
    ERR_UNSUPPORTED_TAG,
    EndOfInputError,
    MalformedWireError,
    PartialInputError,
    Resp3Error,
)
from resp3kit.floats import Float
from resp3kit.integers import Integer
from resp3kit.null import Null
from resp3kit.reader import ByteReader, read_line_crlf
from resp3kit.sequences import Array
from resp3kit.string import (
    BlobError,
    BulkString,
    SimpleError,
    SimpleString,
    VerbatimString,
)
from resp3kit.value import Value

logger = logging.getLogger(__name__)

_INT_RE = re.compile(rb"[+-]?[0-9]+\Z")
_FLOAT_RE = re.compile(
    rb"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)\Z",
    re.IGNORECASE,
)

_Source = Union[ByteReader, bytes, bytearray, memoryview, str]


def _malformed(msg: str, code: str) -> MalformedWireError:
    logger.debug("rejecting record: %s (%s)", msg, code)
    return MalformedWireError(msg, code)


def _text(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def _read_line(reader: ByteReader) -> bytes:
    # The tag byte is already consumed, so running dry here is mid-record
    try:
        return read_line_crlf(reader)
    except EndOfInputError:
        raise PartialInputError("record ends after its tag") from None


def _read_length(reader: ByteReader) -> int:
    line = _read_line(reader)
    if not _INT_RE.match(line):
        raise _malformed(f"invalid length {line!r}", ERR_BAD_LENGTH)
    return int(line)


def _read_payload(reader: ByteReader, length: int) -> str:
    if length > MAX_BULK_LENGTH:
        raise _malformed(f"payload length {length} exceeds maximum {MAX_BULK_LENGTH}", ERR_LIMIT)
    if reader.available() < length + 2:
        raise PartialInputError(
            f"payload needs {length + 2} bytes, {reader.available()} available"
        )
    data = reader.read_exact(length)
    terminator = reader.read_exact(2)
    if config.STRICT_VALIDATE and terminator != CRLF:
        raise _malformed(
            f"payload of {length} bytes followed by {terminator!r}, expected CRLF",
            ERR_BAD_TERMINATOR,
        )
    return _text(data)


def _check_count(count: int, what: str) -> None:
    if count < -1:
        raise _malformed(f"invalid {what} count {count}", ERR_BAD_LENGTH)
    if count > MAX_AGGREGATE_LENGTH:
        raise _malformed(f"{what} count {count} exceeds maximum {MAX_AGGREGATE_LENGTH}", ERR_LIMIT)


# ---------------------------------------------------------------------------- #
#                                 Tag handlers                                 #
# ---------------------------------------------------------------------------- #

def _decode_simple_string(reader: ByteReader, depth: int) -> Value:
    return SimpleString(_text(_read_line(reader)))


def _decode_simple_error(reader: ByteReader, depth: int) -> Value:
    return SimpleError(_text(_read_line(reader)))


def _decode_integer(reader: ByteReader, depth: int) -> Value:
    line = _read_line(reader)
    if not line:
        raise PartialInputError("empty integer")
    if not _INT_RE.match(line):
        raise _malformed(f"invalid integer {line!r}", ERR_BAD_INTEGER)
    value = int(line)
    if not INT64_MIN <= value <= INT64_MAX:
        raise _malformed(f"integer {value} outside signed 64-bit range", ERR_BAD_INTEGER)
    return Integer(value)


def _decode_float(reader: ByteReader, depth: int) -> Value:
    line = _read_line(reader)
    if not _FLOAT_RE.match(line):
        raise _malformed(f"invalid float {line!r}", ERR_BAD_FLOAT)
    return Float(float(line))


def _decode_bulk_string(reader: ByteReader, depth: int) -> Value:
    length = _read_length(reader)
    if length == -1:
        return Null
    if length < -1:
        raise _malformed(f"invalid bulk string length {length}", ERR_BAD_LENGTH)
    return BulkString(_read_payload(reader, length))


def _decode_verbatim_string(reader: ByteReader, depth: int) -> Value:
    length = _read_length(reader)
    if length == -1:
        return Null
    if length == 0:
        return VerbatimString("")
    if length < -1:
        raise _malformed(f"invalid verbatim string length {length}", ERR_BAD_LENGTH)
    return VerbatimString(_read_payload(reader, length))


def _decode_blob_error(reader: ByteReader, depth: int) -> Value:
    length = _read_length(reader)
    if length < 0:
        raise _malformed(f"invalid blob error length {length}", ERR_BAD_LENGTH)
    return BlobError(_read_payload(reader, length))


def _decode_boolean(reader: ByteReader, depth: int) -> Value:
    if reader.available() < 3:
        raise PartialInputError("boolean needs 3 bytes")
    flag = reader.read_byte()
    reader.skip(2)
    return Boolean(flag == b"t")


def _decode_null(reader: ByteReader, depth: int) -> Value:
    reader.skip(2)
    return Null


def _decode_array(reader: ByteReader, depth: int) -> Value:
    count = _read_length(reader)
    _check_count(count, "array")
    if count == -1:
        return Null
    items: List[Value] = []
    for _ in range(count):
        items.append(_decode_value(reader, depth + 1))
    return Array(items)


def _decode_map(reader: ByteReader, depth: int) -> Value:
    size = _read_length(reader)
    _check_count(size, "map")
    if size == -1:
        return Null
    if size % 2:
        raise _malformed(f"map size {size} is not an even number of keys and values", ERR_BAD_LENGTH)
    pairs: List[Tuple[Value, Value]] = []
    for _ in range(size // 2):
        key = _decode_value(reader, depth + 1)
        value = _decode_value(reader, depth + 1)
        pairs.append((key, value))
    return resolve_map(pairs)


_HANDLERS: Dict[bytes, Callable[[ByteReader, int], Value]] = {
    TAG_SIMPLE_STRING: _decode_simple_string,
    TAG_SIMPLE_ERROR: _decode_simple_error,
    TAG_INTEGER: _decode_integer,
    TAG_FLOAT: _decode_float,
    TAG_BULK_STRING: _decode_bulk_string,
    TAG_VERBATIM_STRING: _decode_verbatim_string,
    TAG_ARRAY: _decode_array,
    TAG_BOOLEAN: _decode_boolean,
    TAG_MAP: _decode_map,
    TAG_BLOB_ERROR: _decode_blob_error,
    TAG_NULL: _decode_null,
}


def _decode_value(reader: ByteReader, depth: int) -> Value:
    if depth > config.MAX_DEPTH:
        raise _malformed(f"nesting deeper than {config.MAX_DEPTH}", ERR_LIMIT)
    if reader.available() == 0:
        raise PartialInputError("nested value missing")
    tag = reader.read_byte()
    handler = _HANDLERS.get(tag)
    if handler is None:
        raise _malformed(f"unsupported data type: {tag!r}", ERR_UNSUPPORTED_TAG)
    return handler(reader, depth)


# ---------------------------------------------------------------------------- #
#                                  Public API                                  #
# ---------------------------------------------------------------------------- #

def decode(source: _Source) -> Value:
    """Decode one record from `source`.

    `source` is a `ByteReader` (advanced past the record on success, left at
    the record's start on failure) or a bytes-like / ``str`` buffer.

    Examples:
        >>> decode(b"$6\\r\\nfoobar\\r\\n")
        BulkString('foobar')
        >>> decode(b"%2\\r\\n:1\\r\\n+one\\r\\n").key_kind
        <KeyKind.INTEGER: 'integer'>

    Raises:
        EndOfInputError: `source` had no bytes at all.
        PartialInputError: `source` ends inside the record.
        MalformedWireError: the record violates the wire grammar.
    """
    reader = source if isinstance(source, ByteReader) else ByteReader(source)
    if reader.available() == 0:
        raise EndOfInputError()
    start = reader.tell()
    try:
        return _decode_value(reader, 0)
    except Resp3Error:
        reader.seek(start)
        raise


def decode_from(buffer: Union[bytes, bytearray, memoryview, str], offset: int = 0) -> Tuple[Value, int]:
    """Decode the record starting at `offset`; return it and its size in bytes."""
    reader = ByteReader(buffer, offset)
    value = decode(reader)
    return value, reader.tell() - offset


def iter_decode(source: _Source) -> Iterator[Value]:
    """Yield consecutive records until `source` is cleanly exhausted.

    A trailing incomplete record raises `PartialInputError` with a
    `ByteReader` source left at that record's start. The reader is never
    compacted here: positions from `tell()` stay valid, and a caller that
    keeps feeding a long-lived reader calls `compact()` between batches.
    """
    reader = source if isinstance(source, ByteReader) else ByteReader(source)
    while True:
        try:
            value = decode(reader)
        except EndOfInputError:
            return
        yield value
