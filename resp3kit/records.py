"""Records exchanged by the key-value server that embeds this codec."""

from dataclasses import field
from typing import Any

from resp3kit.struct import record


@record
class ScalarRecord:
    """A stored scalar with its type code, last-access time and expiry."""

    value: Any = field(metadata={"name": "Value"})
    type: int = field(default=0, metadata={"name": "Type"})
    lat: int = field(default=0, metadata={"name": "LAT"})
    expiry: int = field(default=0, metadata={"name": "Expiry"})


@record
class RecordResponse:
    value: Any = field(metadata={"name": "Value"})
    code: int = field(default=0, metadata={"name": "Code"})
