from __future__ import annotations

import os

from resp3kit.constants import MAX_NESTING_DEPTH

# Environment-driven defaults
STRICT_VALIDATE = os.environ.get("RESP3KIT_STRICT_VALIDATE", "1") != "0"
MAX_DEPTH = int(os.environ.get("RESP3KIT_MAX_DEPTH", MAX_NESTING_DEPTH))


def set_strict_validate(enabled: bool) -> None:
    """Enable or disable the CRLF check after length-prefixed payloads."""
    global STRICT_VALIDATE
    STRICT_VALIDATE = bool(enabled)


def set_max_depth(depth: int) -> None:
    """Set the maximum array/map nesting accepted by the decoder."""
    if depth < 1:
        raise ValueError("MAX_DEPTH must be a positive integer")
    global MAX_DEPTH
    MAX_DEPTH = int(depth)
