from typing import ClassVar

from resp3kit.constants import (
    TAG_BLOB_ERROR,
    TAG_BULK_STRING,
    TAG_SIMPLE_ERROR,
    TAG_SIMPLE_STRING,
    TAG_VERBATIM_STRING,
)
from resp3kit.errors import ReplyError


def byte_length(text: str) -> int:
    """UTF-8 length of `text`, counting escaped raw bytes as one byte each."""
    return len(text.encode("utf-8", "surrogateescape"))


class _WireText(str):
    """Base for the text-carrying value cases.

    Equality and hashing are those of `str`, so a decoded value compares
    equal to the plain string it carries.
    """

    tag: ClassVar[bytes] = b""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str.__repr__(self)})"

    def byte_length(self) -> int:
        return byte_length(self)


class SimpleString(_WireText):
    """
    Single-line text framed as ``+<text>\\r\\n``.

    Examples:
        >>> s = SimpleString("OK")
        >>> s == "OK"
        True
        >>> s
        SimpleString('OK')
    """

    tag = TAG_SIMPLE_STRING


class BulkString(_WireText):
    """Length-prefixed text framed as ``$<len>\\r\\n<text>\\r\\n``."""

    tag = TAG_BULK_STRING


class VerbatimString(_WireText):
    """Length-prefixed text framed as ``=<len>\\r\\n<text>\\r\\n``.

    The format prefix (``txt:``) is not interpreted; the payload is kept as-is.
    """

    tag = TAG_VERBATIM_STRING


class _ErrorText(_WireText):
    """Error values compare equal only to errors of the same case."""

    def __eq__(self, other) -> bool:
        if not isinstance(other, _ErrorText) or type(self) is not type(other):
            return False
        return str.__eq__(self, other)

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    __hash__ = str.__hash__

    @property
    def message(self) -> str:
        return str(self)

    def to_exception(self) -> ReplyError:
        return ReplyError(str(self))


class SimpleError(_ErrorText):
    """Single-line error framed as ``-<message>\\r\\n``."""

    tag = TAG_SIMPLE_ERROR


class BlobError(_ErrorText):
    """Length-prefixed error framed as ``!<len>\\r\\n<message>\\r\\n``."""

    tag = TAG_BLOB_ERROR


TEXT_TYPES = (SimpleString, BulkString, VerbatimString)
ERROR_TYPES = (SimpleError, BlobError)
