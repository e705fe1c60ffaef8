import math

from resp3kit.constants import TAG_FLOAT
from resp3kit.integers import numeric_tag


class Float(float):
    """
    Double framed as ``,<decimal>\\r\\n``.

    The wire text always carries six fractional digits, so the wire form is
    a fixed-point rendering rather than the shortest round-trip string.

        >>> Float(3.14).wire_text()
        '3.140000'
    """

    tag = TAG_FLOAT

    def __repr__(self):
        return f"{self.__class__.__name__}({float.__repr__(self)})"

    def __eq__(self, other):
        tag = numeric_tag(other)
        if tag is not None and tag != self.tag:
            return False
        return float.__eq__(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = float.__hash__

    def wire_text(self) -> str:
        if math.isnan(self):
            return "nan"
        if math.isinf(self):
            return "inf" if self > 0 else "-inf"
        return f"{float(self):.6f}"
