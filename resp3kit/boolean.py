from resp3kit.constants import TAG_BOOLEAN
from resp3kit.integers import numeric_tag


class Boolean(int):
    """
    Boolean framed as ``#t\\r\\n`` / ``#f\\r\\n``.

    `bool` cannot be subclassed, so this is an int restricted to 0 and 1 that
    compares equal to ``True``/``False``. It never equals an `Integer` or a
    plain ``int``.
    """

    tag = TAG_BOOLEAN

    def __new__(cls, value=False):
        return super().__new__(cls, bool(value))

    def __repr__(self):
        return f"Boolean({bool(self)})"

    def __str__(self):
        return str(bool(self))

    def __eq__(self, other):
        tag = numeric_tag(other)
        if tag is not None and tag != self.tag:
            return False
        return int.__eq__(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = int.__hash__
