"""
Interface for objects that know how to project themselves into a value.

Anything implementing `to_value()` can be handed to the encoder; the
`@record` decorator generates the method for dataclass-style classes.
"""
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Encodable(Protocol):
    def to_value(self) -> Any: ...
