import logging

from resp3kit.boolean import Boolean
from resp3kit.decoder import decode, decode_from, iter_decode
from resp3kit.dictionary import KeyKind, Map
from resp3kit.encoder import encode, encode_bytes
from resp3kit.errors import (
    EndOfInputError,
    MalformedWireError,
    PartialInputError,
    ReplyError,
    Resp3Error,
    UnsupportedTypeError,
)
from resp3kit.floats import Float
from resp3kit.integers import Integer
from resp3kit.itf.encodable import Encodable
from resp3kit.null import Null, NullType
from resp3kit.reader import ByteReader, read_line_crlf
from resp3kit.records import RecordResponse, ScalarRecord
from resp3kit.sequences import Array
from resp3kit.string import BlobError, BulkString, SimpleError, SimpleString, VerbatimString
from resp3kit.struct import record
from resp3kit.value import Value, is_value, to_native, to_value

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Values
    "Array",
    "BlobError",
    "Boolean",
    "BulkString",
    "Float",
    "Integer",
    "KeyKind",
    "Map",
    "Null",
    "NullType",
    "SimpleError",
    "SimpleString",
    "Value",
    "VerbatimString",
    # Records
    "Encodable",
    "RecordResponse",
    "ScalarRecord",
    "record",
    # Codec
    "ByteReader",
    "decode",
    "decode_from",
    "encode",
    "encode_bytes",
    "is_value",
    "iter_decode",
    "read_line_crlf",
    "to_native",
    "to_value",
    # Errors
    "EndOfInputError",
    "MalformedWireError",
    "PartialInputError",
    "ReplyError",
    "Resp3Error",
    "UnsupportedTypeError",
]
