"""In-memory byte source and the CRLF line reader both codec halves share."""

from __future__ import annotations

from typing import Union

from resp3kit.errors import EndOfInputError, PartialInputError

_ReadBuf = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: _ReadBuf) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8", "surrogateescape")
    return bytes(data)


class ByteReader:
    """
    Rewindable byte source over an in-memory buffer.

    The transport appends whatever it received with `feed`; the decoder reads
    from the current position and never blocks. `available` is the number of
    bytes that can be read right now.

    Examples:
        >>> r = ByteReader(b"+OK\\r\\n")
        >>> r.available()
        5
        >>> read_line_crlf(r)
        b'+OK'
        >>> r.available()
        0
    """

    __slots__ = ("_buf", "_pos")

    def __init__(self, buffer: _ReadBuf = b"", offset: int = 0):
        self._buf = bytearray(_as_bytes(buffer))
        if not 0 <= offset <= len(self._buf):
            raise ValueError(f"offset {offset} outside buffer of {len(self._buf)} bytes")
        self._pos = offset

    def __repr__(self) -> str:
        return f"ByteReader(pos={self._pos}, available={self.available()})"

    def available(self) -> int:
        return len(self._buf) - self._pos

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int) -> None:
        if not 0 <= offset <= len(self._buf):
            raise ValueError(f"offset {offset} outside buffer of {len(self._buf)} bytes")
        self._pos = offset

    def feed(self, data: _ReadBuf) -> None:
        """Append bytes that arrived from the transport."""
        self._buf += _as_bytes(data)

    def compact(self) -> None:
        """Drop bytes before the current position."""
        del self._buf[:self._pos]
        self._pos = 0

    def peek(self, size: int) -> bytes:
        return bytes(self._buf[self._pos:self._pos + size])

    def find(self, sub: bytes) -> int:
        """Position of `sub` relative to the current position, or -1."""
        idx = self._buf.find(sub, self._pos)
        return idx - self._pos if idx >= 0 else -1

    def read_byte(self) -> bytes:
        if self._pos >= len(self._buf):
            raise EndOfInputError()
        b = self._buf[self._pos:self._pos + 1]
        self._pos += 1
        return bytes(b)

    def read_exact(self, size: int) -> bytes:
        """Read exactly `size` bytes or raise `PartialInputError`."""
        if self.available() < size:
            raise PartialInputError(f"need {size} bytes, {self.available()} available")
        data = bytes(self._buf[self._pos:self._pos + size])
        self._pos += size
        return data

    def skip(self, size: int) -> None:
        if self.available() < size:
            raise PartialInputError(f"need {size} bytes, {self.available()} available")
        self._pos += size


def read_line_crlf(reader: ByteReader) -> bytes:
    """Read one CRLF-terminated token and return it without the CRLF.

    Raises:
        EndOfInputError: no bytes at all were available.
        PartialInputError: no ``\\n`` yet, or the ``\\n`` is not preceded by
            ``\\r``. Nothing is consumed in either case.
    """
    if reader.available() == 0:
        raise EndOfInputError()
    end = reader.find(b"\n")
    if end < 0:
        raise PartialInputError("line is not terminated")
    line = reader.peek(end + 1)
    if len(line) < 2 or line[-2:] != b"\r\n":
        raise PartialInputError("line does not end with CRLF")
    reader.skip(end + 1)
    return line[:-2]
