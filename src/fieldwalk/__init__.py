"""Recursive predicate assertions over arbitrary Python object graphs.

Build an AssertionPolicy once, then walk any object graph with a
GraphTraversalEngine (or the assert_recursively() shortcut) to find every
field location where a predicate fails.
"""

from fieldwalk.assertion import (
    RecursiveAssertion,
    RecursiveAssertionError,
    assert_recursively,
)
from fieldwalk.engine import GraphTraversalEngine, Predicate
from fieldwalk.introspection import (
    ValueKind,
    classify_value,
    is_empty_optional,
    is_library_type,
    iter_fields,
)
from fieldwalk.location import FieldLocation
from fieldwalk.policy import AssertionPolicy, CollectionAssertionPolicy, MapAssertionPolicy

__all__ = [
    "AssertionPolicy",
    "CollectionAssertionPolicy",
    "FieldLocation",
    "GraphTraversalEngine",
    "MapAssertionPolicy",
    "Predicate",
    "RecursiveAssertion",
    "RecursiveAssertionError",
    "ValueKind",
    "assert_recursively",
    "classify_value",
    "is_empty_optional",
    "is_library_type",
    "iter_fields",
]
