"""Codec error codes and exception classes.

Every exception raised by the encoder or decoder derives from `Resp3Error`
and carries a `.code` string. The concrete classes also subclass the builtin
a caller would naturally catch (`TypeError` for unencodable input,
`ValueError` for bad wire data, `EOFError` for a clean end of stream).
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
ERR_UNSUPPORTED_TYPE: str = "ERR_UNSUPPORTED_TYPE"  # encode: no rule for input
ERR_UNSUPPORTED_TAG: str = "ERR_UNSUPPORTED_TAG"    # decode: unknown tag byte
ERR_BAD_LENGTH: str = "ERR_BAD_LENGTH"              # length/count not an int
ERR_BAD_INTEGER: str = "ERR_BAD_INTEGER"            # ':' payload not an int64
ERR_BAD_FLOAT: str = "ERR_BAD_FLOAT"                # ',' payload not a float
ERR_BAD_TERMINATOR: str = "ERR_BAD_TERMINATOR"      # payload not followed by CRLF
ERR_LIMIT: str = "ERR_LIMIT"                        # exceeds a decode limit
ERR_PARTIAL: str = "ERR_PARTIAL"                    # record incomplete, retry
ERR_EOF: str = "ERR_EOF"                            # clean end between records


class Resp3Error(Exception):
    """Base class for codec errors. `.code` is one of the ERR_* strings."""

    code: str = ""

    def __init__(self, msg: str = "", code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(msg or self.code)


class UnsupportedTypeError(Resp3Error, TypeError):
    """The encoder has no rule for the input's type."""

    code = ERR_UNSUPPORTED_TYPE


class MalformedWireError(Resp3Error, ValueError):
    """The bytes violate the wire grammar. Retrying will not help."""

    code = ERR_UNSUPPORTED_TAG


class PartialInputError(Resp3Error):
    """The source holds an incomplete record.

    Supply more bytes and decode again from the start of the record.
    """

    code = ERR_PARTIAL


class EndOfInputError(Resp3Error, EOFError):
    """The source was empty where a new top-level record would start."""

    code = ERR_EOF


class ReplyError(Exception):
    """Native exception form of a decoded Simple Error or Blob Error."""
