from resp3kit.constants import TAG_NULL


class NullType:
    """The RESP3 Null. Use the `Null` singleton; do not instantiate."""

    _instance = None
    tag = TAG_NULL

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other) -> bool:
        return other is None or isinstance(other, NullType)

    def __hash__(self) -> int:
        return hash(None)

    def __reduce__(self):
        return (NullType, ())


Null = NullType()
