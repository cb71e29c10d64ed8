"""Immutable policy for recursive assertions.

An AssertionPolicy decides which nodes of an object graph are visited and
which of them are handed to the predicate. It holds no traversal logic: the
engine only reads it, so one policy can be shared by any number of engines.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING

from pyrsistent import PRecord, field, pset_field, pvector_field

if TYPE_CHECKING:
    from fieldwalk.location import FieldLocation


class CollectionAssertionPolicy(Enum):
    """How collections and arrays (list, tuple, set, ...) are asserted."""

    ELEMENTS_ONLY = "elements_only"
    COLLECTION_OBJECT_ONLY = "collection_object_only"
    COLLECTION_OBJECT_AND_ELEMENTS = "collection_object_and_elements"


class MapAssertionPolicy(Enum):
    """How mappings are asserted."""

    MAP_OBJECT_ONLY = "map_object_only"
    VALUES_ONLY = "values_only"
    MAP_OBJECT_AND_ENTRIES = "map_object_and_entries"


class AssertionPolicy(PRecord):
    """Immutable set of options controlling a recursive assertion.

    Attributes:
        ignore_all_null_fields: Skip every node whose value is None.
        ignore_all_empty_optional_fields: Skip every empty optional
            (a weak reference whose referent is gone).
        ignored_fields: Exact dotted paths to skip, e.g. ``"author.books[0]"``.
        ignored_field_regexes: Regex sources; a path fully matching any of
            them is skipped.
        ignored_types: Types whose values are skipped (exact runtime type).
        assert_over_primitive_fields: Pass bool/int/float/complex values to
            the predicate.
        skip_library_type_objects: Do not enter objects whose type comes from
            the standard library; they are still asserted as leaves.
        collection_policy: Whether collections, their elements, or both are
            asserted.
        map_policy: Whether mappings, their entries, or both are asserted.
    """

    ignore_all_null_fields = field(type=bool, initial=False)
    ignore_all_empty_optional_fields = field(type=bool, initial=False)
    ignored_fields = pset_field(str)
    ignored_field_regexes = pvector_field(str)
    ignored_types = pset_field(type)
    assert_over_primitive_fields = field(type=bool, initial=True)
    skip_library_type_objects = field(type=bool, initial=True)
    collection_policy = field(
        type=CollectionAssertionPolicy,
        initial=CollectionAssertionPolicy.COLLECTION_OBJECT_AND_ELEMENTS,
    )
    map_policy = field(
        type=MapAssertionPolicy,
        initial=MapAssertionPolicy.MAP_OBJECT_AND_ENTRIES,
    )

    # -- fluent copy-on-write helpers -------------------------------------

    def ignoring_all_null_fields(self) -> AssertionPolicy:
        """Return a policy that skips every None-valued node."""
        return self.set(ignore_all_null_fields=True)

    def ignoring_all_empty_optional_fields(self) -> AssertionPolicy:
        """Return a policy that skips every empty optional."""
        return self.set(ignore_all_empty_optional_fields=True)

    def ignoring_fields(self, *paths: str) -> AssertionPolicy:
        """Return a policy that also skips the given exact paths."""
        return self.set(ignored_fields=set(self.ignored_fields) | set(paths))

    def ignoring_fields_matching_regexes(self, *patterns: str) -> AssertionPolicy:
        """Return a policy that also skips paths fully matching any pattern.

        Raises:
            re.error: If a pattern does not compile.
        """
        for pattern in patterns:
            re.compile(pattern)
        return self.set(ignored_field_regexes=[*self.ignored_field_regexes, *patterns])

    def ignoring_fields_of_types(self, *types: type) -> AssertionPolicy:
        """Return a policy that also skips values of the given types."""
        return self.set(ignored_types=set(self.ignored_types) | set(types))

    def with_assertion_over_primitive_fields(self, enabled: bool) -> AssertionPolicy:
        return self.set(assert_over_primitive_fields=enabled)

    def with_recursion_into_library_types(self, enabled: bool) -> AssertionPolicy:
        """Return a policy that enters standard-library objects when enabled."""
        return self.set(skip_library_type_objects=not enabled)

    def with_collection_policy(self, policy: CollectionAssertionPolicy) -> AssertionPolicy:
        return self.set(collection_policy=policy)

    def with_map_policy(self, policy: MapAssertionPolicy) -> AssertionPolicy:
        return self.set(map_policy=policy)

    # -- derived predicates -----------------------------------------------

    def should_ignore_map_container(self) -> bool:
        return self.map_policy is MapAssertionPolicy.VALUES_ONLY

    def should_ignore_collection_container(self) -> bool:
        return self.collection_policy is CollectionAssertionPolicy.ELEMENTS_ONLY

    def matches_ignored_field(self, location: FieldLocation) -> bool:
        return str(location) in self.ignored_fields

    def matches_ignored_field_regex(self, location: FieldLocation) -> bool:
        path = str(location)
        return any(re.fullmatch(pattern, path) for pattern in self.ignored_field_regexes)

    # -- description ------------------------------------------------------

    def describe(self) -> str:
        """Describe every option that differs from the defaults, one per line."""
        lines: list[str] = []
        if self.ignore_all_null_fields:
            lines.append("- all null fields were ignored in the recursive assertion")
        if self.ignore_all_empty_optional_fields:
            lines.append("- all empty optional fields were ignored in the recursive assertion")
        if self.ignored_fields:
            names = ", ".join(sorted(self.ignored_fields))
            lines.append(f"- the following fields were ignored in the recursive assertion: {names}")
        if self.ignored_field_regexes:
            patterns = ", ".join(self.ignored_field_regexes)
            lines.append(
                "- the fields matching the following regexes were ignored in the "
                f"recursive assertion: {patterns}"
            )
        if self.ignored_types:
            names = ", ".join(sorted(_type_name(tp) for tp in self.ignored_types))
            lines.append(
                "- the following types were ignored in the recursive assertion: " + names
            )
        if not self.assert_over_primitive_fields:
            lines.append("- primitive fields were ignored in the recursive assertion")
        if not self.skip_library_type_objects:
            lines.append(
                "- fields from standard library types were included in the recursive assertion"
            )
        if self.collection_policy is not CollectionAssertionPolicy.COLLECTION_OBJECT_AND_ELEMENTS:
            lines.append(f"- the collection assertion policy was {self.collection_policy.name}")
        if self.map_policy is not MapAssertionPolicy.MAP_OBJECT_AND_ENTRIES:
            lines.append(f"- the map assertion policy was {self.map_policy.name}")
        return "\n".join(lines)


def _type_name(tp: type) -> str:
    if tp.__module__ == "builtins":
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"
