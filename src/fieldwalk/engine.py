"""Recursive predicate assertion over an object graph.

Walks the graph reachable from a root in deterministic depth-first order,
applies an AssertionPolicy to decide which nodes are asserted and which are
entered, and records the location of every node the predicate rejected.

Cycles are collapsed by object identity: a node that can hold references is
asserted and entered at most once per run.

Engines are not thread safe. Use one engine per thread; the policy itself is
immutable and can be shared.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from typing import Any

from fieldwalk.introspection import (
    ValueKind,
    classify_value,
    is_empty_optional,
    iter_fields,
)
from fieldwalk.location import FieldLocation
from fieldwalk.policy import AssertionPolicy, CollectionAssertionPolicy, MapAssertionPolicy

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], object]

# Kinds that can hold references to other nodes and so take part in cycles.
_REFERENCE_KINDS: frozenset[ValueKind] = frozenset(
    {"array", "collection", "map", "optional", "object"}
)

_Frontier = list[tuple[Any, FieldLocation]]


def _is_empty_immutable(value: Any) -> bool:
    # CPython shares these as singletons; they hold no references.
    return isinstance(value, (tuple, frozenset)) and not value


class _TraversalRun:
    """Run-local state, replaced on every reset()."""

    __slots__ = ("completed", "failures", "visited")

    def __init__(self) -> None:
        self.failures: list[FieldLocation] = []
        # id -> object; holding the object keeps its id from being reused mid-run
        self.visited: dict[int, Any] = {}
        self.completed = False


class GraphTraversalEngine:
    """Applies a predicate to every included node of an object graph.

    A run starts at reset(). Call reset() before every independent
    assert_over_graph(); otherwise the visited set and failures of the
    previous run carry over into the next one.
    """

    __slots__ = ("_policy", "_run")

    def __init__(self, policy: AssertionPolicy) -> None:
        self._policy = policy
        self._run = _TraversalRun()

    @property
    def policy(self) -> AssertionPolicy:
        return self._policy

    @property
    def visited_count(self) -> int:
        return len(self._run.visited)

    def has_visited(self, obj: Any) -> bool:
        return self._run.visited.get(id(obj)) is obj

    def reset(self) -> None:
        self._run = _TraversalRun()

    # -- public entry point ------------------------------------------------

    def assert_over_graph(self, predicate: Predicate, root: Any) -> list[FieldLocation]:
        """Apply ``predicate`` to every included node reachable from ``root``.

        The root itself is only entered, never asserted.

        Returns:
            Locations where the predicate returned a false value, in traversal
            order. Includes failures from earlier runs if reset() was skipped.

        Raises:
            TypeError: If ``predicate`` is not callable.
            Exception: Anything raised by the predicate or while reading a
                field propagates unchanged; nothing from the aborted run is
                recorded as a failure.
        """
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")

        run = self._run
        if run.completed:
            warnings.warn(
                "assert_over_graph() called again without reset(); visited nodes and "
                "failures from the previous run are carried over",
                RuntimeWarning,
                stacklevel=2,
            )

        logger.debug("Recursive assertion over %s root", type(root).__name__)

        failures: list[FieldLocation] = []
        frontier: _Frontier = [(root, FieldLocation.root())]
        while frontier:
            value, location = frontier.pop()
            children = self._visit(predicate, value, location, run, failures)
            # Reversed so that children pop in declaration order.
            frontier.extend(reversed(children))

        run.failures.extend(failures)
        run.completed = True
        logger.debug(
            "Recursive assertion finished: %d nodes entered, %d failures",
            len(run.visited),
            len(run.failures),
        )
        return list(run.failures)

    # -- node visit --------------------------------------------------------

    def _visit(
        self,
        predicate: Predicate,
        value: Any,
        location: FieldLocation,
        run: _TraversalRun,
        failures: list[FieldLocation],
    ) -> _Frontier:
        is_root = location.is_root()
        kind = classify_value(value)

        if not is_root and self._must_be_ignored(value, kind, location):
            return []

        if self._is_entered(kind) and not _is_empty_immutable(value):
            if id(value) in run.visited:
                return []
            run.visited[id(value)] = value

        if not is_root and self._should_evaluate(kind):
            if not predicate(value):
                failures.append(location)

        return self._children(value, kind, location)

    def _must_be_ignored(self, value: Any, kind: ValueKind, location: FieldLocation) -> bool:
        policy = self._policy
        if kind == "null" and policy.ignore_all_null_fields:
            return True
        if policy.ignore_all_empty_optional_fields and is_empty_optional(value):
            return True
        if kind == "primitive" and not policy.assert_over_primitive_fields:
            return True
        if policy.matches_ignored_field(location):
            return True
        if policy.matches_ignored_field_regex(location):
            return True
        return type(value) in policy.ignored_types

    def _is_entered(self, kind: ValueKind) -> bool:
        if kind == "library":
            return not self._policy.skip_library_type_objects
        return kind in _REFERENCE_KINDS

    def _should_evaluate(self, kind: ValueKind) -> bool:
        if kind in ("array", "collection"):
            return not self._policy.should_ignore_collection_container()
        if kind == "map":
            return not self._policy.should_ignore_map_container()
        return True

    # -- recursion by kind -------------------------------------------------

    def _children(self, value: Any, kind: ValueKind, location: FieldLocation) -> _Frontier:
        if kind in ("array", "collection"):
            if self._policy.collection_policy is CollectionAssertionPolicy.COLLECTION_OBJECT_ONLY:
                return []
            return [(element, location.element(i)) for i, element in enumerate(value)]

        if kind == "map":
            map_policy = self._policy.map_policy
            if map_policy is MapAssertionPolicy.MAP_OBJECT_ONLY:
                return []
            children: _Frontier = []
            for key, item in value.items():
                if map_policy is not MapAssertionPolicy.VALUES_ONLY:
                    children.append((key, location.key(key)))
                children.append((item, location.value(key)))
            return children

        if kind == "optional":
            # A live reference is transparent: its referent sits at the same path.
            referent = value()
            return [] if referent is None else [(referent, location)]

        if self._is_entered(kind):
            return [(field_value, location.field(name)) for name, field_value in iter_fields(value)]

        # null, primitive, enum, string, and skipped library objects are leaves
        return []
