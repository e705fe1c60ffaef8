# PEP 681 – Data Class Transforms (built-in from Python 3.11).
# Fall back to ``typing_extensions`` for older interpreters so that
# static analysers understand the decorator.

from dataclasses import MISSING, dataclass, fields, is_dataclass
from typing import Any, Mapping, Type, TypeVar, cast

try:
    from typing import dataclass_transform  # type: ignore
except ImportError:  # pragma: no cover – <3.11
    from typing_extensions import dataclass_transform  # type: ignore

from resp3kit.dictionary import KeyKind, Map
from resp3kit.string import SimpleString

_T = TypeVar("_T")


def wire_name(field) -> str:
    return field.metadata.get("name", field.name)


def exported_fields(obj_or_cls):
    """Dataclass fields that take part in the projection, in declaration order.

    Fields whose name starts with an underscore are private and skipped.
    """
    return [f for f in fields(obj_or_cls) if not f.name.startswith("_")]


def project_fields(obj) -> Map:
    """Project a dataclass instance into a text-keyed Map.

    Keys are the field names (or a ``name`` given in the field metadata) as
    Simple Strings; values are converted with the general rules.
    """
    from resp3kit.value import to_value

    return Map(
        ((SimpleString(wire_name(f)), to_value(getattr(obj, f.name)))
         for f in exported_fields(obj)),
        key_kind=KeyKind.TEXT,
    )


@dataclass_transform(eq_default=True, order_default=False, kw_only_default=False)
def record(_cls=None, *, frozen=False, **kwargs):
    """Extension of dataclass that projects instances into maps.

    Usage:
        >>> @record
        >>> class Person:
        >>>     name: str
        >>>     age: int = field(default=0, metadata={"name": "Age"})
        >>>
        >>> encode(Person("Alice", 25))
        '%4\\r\\n+name\\r\\n+Alice\\r\\n+Age\\r\\n:25\\r\\n'

    """
    def wrap(cls):
        new_cls = dataclass(cls, frozen=frozen, **kwargs)  # type: ignore[arg-type]

        def to_value(self) -> Map:
            return project_fields(self)

        @classmethod
        def from_value(cls: Type[_T], data: Mapping) -> _T:  # type: ignore[misc]
            from resp3kit.value import to_native

            if not isinstance(data, Mapping):
                raise TypeError(
                    f"{cls.__name__}.from_value expects a mapping, got {type(data).__name__}"
                )
            init_data: dict[str, Any] = {}
            for field in exported_fields(cast(Any, cls)):
                if not field.init:
                    continue
                k = wire_name(field)
                if k in data:
                    init_data[field.name] = to_native(data[k])
                elif field.default is MISSING and field.default_factory is MISSING:
                    raise ValueError(f"{cls.__name__}: missing field '{k}'")
            return cls(**init_data)  # type: ignore[call-arg]

        # Only overwrite if the method is not already defined
        if not new_cls.__dict__.get("to_value"):
            new_cls.to_value = to_value
        if not new_cls.__dict__.get("from_value"):
            new_cls.from_value = from_value

        return new_cls

    return wrap if _cls is None else wrap(_cls)


def is_record(obj) -> bool:
    return is_dataclass(obj) and not isinstance(obj, type)
