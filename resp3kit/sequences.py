from typing import Iterable

from resp3kit.constants import TAG_ARRAY


class Array(tuple):
    """
    Ordered, fixed-length sequence of values framed as ``*<count>\\r\\n``
    followed by each element.

    The length is fixed at construction; there is no append or resize. A
    null array is represented by `Null`, not by an empty `Array`.

    Examples:
        >>> a = Array([SimpleString("foo"), Integer(1)])
        >>> len(a)
        2
        >>> a == ("foo", 1)
        True
    """

    tag = TAG_ARRAY

    def __new__(cls, items: Iterable = ()):
        return super().__new__(cls, items)

    def __repr__(self) -> str:
        return f"Array([{', '.join(repr(v) for v in self)}])"
