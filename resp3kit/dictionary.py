import enum
from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Tuple

from resp3kit.constants import TAG_MAP
from resp3kit.integers import Integer
from resp3kit.null import NullType
from resp3kit.string import TEXT_TYPES


class KeyKind(enum.Enum):
    """Native key type a decoded map resolved to."""

    TEXT = "text"
    INTEGER = "integer"
    MIXED = "mixed"


class Map(Mapping):
    """
    Immutable mapping of values framed as ``%<2 * pairs>\\r\\n`` followed by
    key, value for every pair.

    Pairs keep their insertion order. When the same key appears twice the
    later value wins and the key keeps its first position. Maps are hashable
    over their set of items, so equal maps hash equally whatever their order
    and can themselves serve as keys of a mixed map.

    Examples:
        >>> m = Map([(SimpleString("a"), Integer(1))])
        >>> m["a"]
        Integer(1)
        >>> m == {"a": 1}
        True
        >>> m.key_kind
        <KeyKind.TEXT: 'text'>
    """

    tag = TAG_MAP

    __slots__ = ("_items", "_key_kind", "_hash")

    def __init__(self, pairs: Optional[Iterable[Tuple[Any, Any]]] = None,
                 key_kind: Optional[KeyKind] = None):
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        self._items: dict = dict(pairs or ())
        self._key_kind = key_kind if key_kind is not None else classify_keys(self._items)
        self._hash: Optional[int] = None

    @property
    def key_kind(self) -> KeyKind:
        return self._key_kind

    def __getitem__(self, key):
        return self._items[key]

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._items.items()))
        return self._hash

    def __repr__(self) -> str:
        items = [f"{k!r}: {v!r}" for k, v in self._items.items()]
        return f"Map({{{', '.join(items)}}})"


def classify_keys(keys: Iterable) -> KeyKind:
    """Pick the most specific key kind for `keys` in a single pass.

    Null keys are ignored. No keys at all (or only Null keys) is TEXT.
    """
    all_text = True
    all_integer = True
    for key in keys:
        if isinstance(key, NullType):
            continue
        if not isinstance(key, TEXT_TYPES):
            all_text = False
        if not isinstance(key, Integer):
            all_integer = False
    if all_text:
        return KeyKind.TEXT
    if all_integer:
        return KeyKind.INTEGER
    return KeyKind.MIXED


def resolve_map(pairs: Iterable[Tuple[Any, Any]]) -> Map:
    """Build the final map from fully decoded pairs, in wire order.

    Classification runs only after every pair is known. Pairs whose key
    decoded to Null are dropped from the result.
    """
    pairs = list(pairs)
    kind = classify_keys(key for key, _ in pairs)
    return Map(((k, v) for k, v in pairs if not isinstance(k, NullType)), key_kind=kind)
