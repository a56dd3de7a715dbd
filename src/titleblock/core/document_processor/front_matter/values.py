"""
Metadata Value Module

Tagged representation of parsed front matter. Every value produced by the
structured-data adapter is exactly one of:

- ``Absent``: no value (YAML null or a missing key); the ``ABSENT`` singleton
- ``ScalarValue``: a YAML scalar (string, integer, float or boolean)
- ``SequenceValue``: an ordered tuple of values
- ``MappingValue``: string keys to values, in insertion order

Consumers inspect values with ``isinstance`` and the ``text``/``get``
helpers instead of probing arbitrary Python objects.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

ScalarType = Union[str, int, float, bool]


class MetadataValue:
    """Base class of the metadata value variants."""

    __slots__ = ()

    @property
    def text(self) -> Optional[str]:
        """The value as a string if it is a string scalar, otherwise None."""
        return None

    def to_python(self) -> Any:
        """Convert back to plain Python data (dict, list, scalars, None)."""
        raise NotImplementedError


class Absent(MetadataValue):
    """No value. Use the ``ABSENT`` singleton."""

    __slots__ = ()
    _instance: Optional["Absent"] = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def to_python(self) -> Any:
        return None

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()


@dataclass(frozen=True)
class ScalarValue(MetadataValue):
    value: ScalarType

    @property
    def text(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class SequenceValue(MetadataValue):
    items: Tuple[MetadataValue, ...] = ()

    def __iter__(self) -> Iterator[MetadataValue]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> Any:
        return [item.to_python() for item in self.items]


@dataclass(eq=True)
class MappingValue(MetadataValue):
    """
    Ordered mapping of string keys to metadata values.

    Treated as immutable: transformations return new instances.
    """
    entries: Dict[str, MetadataValue] = field(default_factory=dict)

    def get(self, key: str) -> MetadataValue:
        """Return the value for ``key`` or ``ABSENT``."""
        return self.entries.get(key, ABSENT)

    def keys(self) -> List[str]:
        return list(self.entries)

    def items(self) -> List[Tuple[str, MetadataValue]]:
        return list(self.entries.items())

    def without(self, keys: Iterable[str]) -> "MappingValue":
        """Return a new mapping without ``keys``, preserving order."""
        excluded = set(keys)
        return MappingValue({k: v for k, v in self.entries.items() if k not in excluded})

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def to_python(self) -> Any:
        return {key: value.to_python() for key, value in self.entries.items()}


def from_python(data: Any) -> MetadataValue:
    """
    Convert plain Python data, as returned by a YAML loader, to a MetadataValue.

    Mapping keys are converted to strings. Values outside the YAML core
    types (binary data, sets, timestamps from custom loaders) become string
    scalars.
    """
    if data is None:
        return ABSENT
    if isinstance(data, MetadataValue):
        return data
    if isinstance(data, dict):
        return MappingValue({str(key): from_python(value) for key, value in data.items()})
    if isinstance(data, (list, tuple)):
        return SequenceValue(tuple(from_python(item) for item in data))
    if isinstance(data, (str, bool, int, float)):
        return ScalarValue(data)
    if isinstance(data, bytes):
        return ScalarValue(data.decode("utf-8", errors="replace"))
    if isinstance(data, (set, frozenset)):
        return SequenceValue(tuple(from_python(item) for item in sorted(data, key=str)))
    return ScalarValue(str(data))


def as_items(value: MetadataValue) -> Tuple[MetadataValue, ...]:
    """
    Coerce a value to a sequence of items.

    ``ABSENT`` gives no items, a sequence gives its items and any other
    value becomes a one-element tuple.
    """
    if isinstance(value, Absent):
        return ()
    if isinstance(value, SequenceValue):
        return value.items
    return (value,)
