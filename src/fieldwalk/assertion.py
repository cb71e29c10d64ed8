"""Assertion surface over the traversal engine.

Turns the failure list of a GraphTraversalEngine run into an AssertionError
so the engine can be used directly in tests::

    assert_recursively(author).has_no_null_fields()
    assert_recursively(author, policy).all_fields_satisfy(lambda v: v != "")
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fieldwalk.engine import GraphTraversalEngine, Predicate
from fieldwalk.location import FieldLocation
from fieldwalk.policy import AssertionPolicy


class RecursiveAssertionError(AssertionError):
    """Raised when one or more fields of an object graph fail a predicate."""

    def __init__(self, failures: Sequence[FieldLocation], policy: AssertionPolicy) -> None:
        self.failures = tuple(failures)
        self.policy = policy
        super().__init__(_failure_message(self.failures, policy))


def _failure_message(failures: Sequence[FieldLocation], policy: AssertionPolicy) -> str:
    lines = ["The following fields did not satisfy the predicate:"]
    lines.extend(f"  {location}" for location in failures)
    description = policy.describe()
    if description:
        lines.append("The recursive assertion was performed with this configuration:")
        lines.append(description)
    return "\n".join(lines)


class RecursiveAssertion:
    """Asserts predicates over every field of ``actual``, recursively.

    Several predicates can be chained; the engine is reset before each one.
    Not thread safe: do not share an instance between threads.
    """

    def __init__(self, actual: Any, policy: AssertionPolicy | None = None) -> None:
        self.actual = actual
        self.policy = policy if policy is not None else AssertionPolicy()
        self._engine = GraphTraversalEngine(self.policy)

    def all_fields_satisfy(self, predicate: Predicate) -> RecursiveAssertion:
        """Assert that ``predicate`` holds for every included field.

        Raises:
            RecursiveAssertionError: Listing every failing field path.
        """
        # Reset in case this is not the first predicate run over actual.
        self._engine.reset()
        failures = self._engine.assert_over_graph(predicate, self.actual)
        if failures:
            raise RecursiveAssertionError(failures, self.policy)
        return self

    def has_no_null_fields(self) -> RecursiveAssertion:
        return self.all_fields_satisfy(_is_not_none)


def _is_not_none(value: Any) -> bool:
    return value is not None


def assert_recursively(actual: Any, policy: AssertionPolicy | None = None) -> RecursiveAssertion:
    """Start a recursive assertion over ``actual``."""
    return RecursiveAssertion(actual, policy)
