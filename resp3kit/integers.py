from typing import Any, Optional

from resp3kit.constants import INT64_MIN, TAG_BOOLEAN, TAG_FLOAT, TAG_INTEGER, UINT64_MAX


def numeric_tag(obj: Any) -> Optional[bytes]:
    """Wire tag `obj` would carry as a number, or None for non-numbers.

    Value classes report their own tag; `bool`, `int` and `float` map to
    Boolean, Integer and Float.
    """
    tag = getattr(type(obj), "tag", None)
    if tag is not None:
        return tag
    if isinstance(obj, bool):
        return TAG_BOOLEAN
    if isinstance(obj, int):
        return TAG_INTEGER
    if isinstance(obj, float):
        return TAG_FLOAT
    return None


class Integer(int):
    """
    64-bit integer framed as ``:<decimal>\\r\\n``.

    Accepts every signed or unsigned 64-bit value, i.e. ``[-2**63, 2**64 - 1]``.
    The decoder only produces the signed range.

    Usage:
        >>> Integer(42)
        Integer(42)
        >>> Integer(-7) + 1
        Integer(-6)
        >>> Integer(2**64)
        Traceback (most recent call last):
        ...
        ValueError: Integer out of range: 18446744073709551616 not in [-9223372036854775808, 18446744073709551615]
    """

    tag = TAG_INTEGER

    def __new__(cls, value: Any):
        if isinstance(value, bool):
            value = int(value)
        value = int(value)
        if not (INT64_MIN <= value <= UINT64_MAX):
            raise ValueError(f"Integer out of range: {value!r} "
                             f"not in [{INT64_MIN}, {UINT64_MAX}]")
        return super().__new__(cls, value)

    def __repr__(self):
        return f"{self.__class__.__name__}({int(self)})"

    # Integer(1), Boolean(True) and Float(1.0) are distinct values
    def __eq__(self, other):
        tag = numeric_tag(other)
        if tag is not None and tag != self.tag:
            return False
        return int.__eq__(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = int.__hash__

    def _wrap_op(self, other: Any, op):
        res = op(int(self), int(other))
        return type(self)(res)

    # ---------------------------------------------------------------------------- #
    #                                  Arithmetic                                  #
    # ---------------------------------------------------------------------------- #
    def __add__(self, other):
        return self._wrap_op(other, int.__add__)

    def __sub__(self, other):
        return self._wrap_op(other, int.__sub__)

    def __mul__(self, other):
        return self._wrap_op(other, int.__mul__)

    def __floordiv__(self, other):
        return self._wrap_op(other, int.__floordiv__)
