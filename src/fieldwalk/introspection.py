"""Runtime introspection used by the traversal engine.

Classifies values by kind and enumerates the named fields of arbitrary
objects. Classification is done by isinstance checks in priority order, so
the order of the checks in classify_value() matters.
"""

from __future__ import annotations

import array
import dataclasses
import sys
import weakref
from collections.abc import Collection, Iterator, Mapping
from enum import Enum
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Value classification
# ---------------------------------------------------------------------------

ValueKind = Literal[
    "null",
    "primitive",
    "array",
    "collection",
    "map",
    "optional",
    "enum",
    "string",
    "library",
    "object",
]

_PRIMITIVE_TYPES = (bool, int, float, complex)

# Sized and iterable, but leaves rather than collections of characters/bytes.
_STRING_TYPES = (str, bytes, bytearray, memoryview)

_LIBRARY_MODULES = frozenset(sys.stdlib_module_names) | {"builtins"}


def is_library_type(tp: type) -> bool:
    """Return True if ``tp`` is defined in the standard library."""
    module = getattr(tp, "__module__", None) or ""
    return module.partition(".")[0] in _LIBRARY_MODULES


def is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_empty_optional(value: Any) -> bool:
    """Return True for a weak reference whose referent has been collected."""
    return isinstance(value, weakref.ref) and value() is None


def classify_value(value: Any) -> ValueKind:
    """Classify a value by runtime kind.

    Collections and mappings are recognized before the library-type check, so
    built-in containers are traversed even though their types are library
    types.
    """
    if value is None:
        return "null"
    # bool and int subclasses (IntEnum, IntFlag) included
    if isinstance(value, _PRIMITIVE_TYPES):
        return "primitive"
    if is_named_tuple(value):
        return "object"
    if isinstance(value, (tuple, array.array)):
        return "array"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, _STRING_TYPES):
        return "string"
    if isinstance(value, Collection):
        return "collection"
    if isinstance(value, weakref.ref):
        return "optional"
    if isinstance(value, Enum):
        return "enum"
    if is_library_type(type(value)):
        return "library"
    return "object"


# ---------------------------------------------------------------------------
# Field enumeration
# ---------------------------------------------------------------------------


def iter_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, value)`` for every field of ``obj`` in declaration order.

    Named tuples yield their ``_fields``. Otherwise dataclass fields come
    first, then ``__slots__`` (base classes first, unset slots skipped), then
    remaining instance ``__dict__`` entries in insertion order. Private names
    are included. Errors raised while reading a field propagate.
    """
    cls = type(obj)
    if is_named_tuple(obj):
        for name in cls._fields:
            yield name, getattr(obj, name)
        return

    seen: set[str] = set()

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        for dc_field in dataclasses.fields(obj):
            seen.add(dc_field.name)
            yield dc_field.name, getattr(obj, dc_field.name)

    for klass in reversed(cls.__mro__):
        for name in _declared_slots(klass):
            if name in seen:
                continue
            descriptor = klass.__dict__.get(_mangle(klass, name))
            if descriptor is None:
                continue
            try:
                value = descriptor.__get__(obj, cls)
            except AttributeError:
                # Slot declared but never assigned.
                continue
            seen.add(name)
            yield name, value

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, value in list(instance_dict.items()):
            if name not in seen:
                yield name, value


def _declared_slots(klass: type) -> tuple[str, ...]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(name for name in slots if name not in ("__dict__", "__weakref__"))


def _mangle(klass: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name
