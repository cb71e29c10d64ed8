"""Tests for the recursive assertion surface."""

from __future__ import annotations

import pytest

from fieldwalk import (
    AssertionPolicy,
    MapAssertionPolicy,
    RecursiveAssertion,
    RecursiveAssertionError,
    assert_recursively,
)
from tests.conftest import Author, author_graph


class TestAllFieldsSatisfy:
    def test_passing_graph_returns_self(self):
        pramod, _, _ = author_graph()
        assertion = assert_recursively(pramod)

        assert assertion.all_fields_satisfy(lambda value: value is not None) is assertion

    def test_failing_graph_raises_with_paths(self):
        pramod, martin, _ = author_graph()
        martin.email = None

        with pytest.raises(RecursiveAssertionError) as excinfo:
            assert_recursively(pramod).has_no_null_fields()

        error = excinfo.value
        assert [str(f) for f in error.failures] == ["books[0].authors[1].email"]
        assert str(error).splitlines() == [
            "The following fields did not satisfy the predicate:",
            "  books[0].authors[1].email",
        ]

    def test_is_an_assertion_error(self):
        with pytest.raises(AssertionError):
            assert_recursively(Author("a", None)).has_no_null_fields()

    def test_message_includes_non_default_policy(self):
        policy = AssertionPolicy().with_map_policy(MapAssertionPolicy.VALUES_ONLY)

        with pytest.raises(RecursiveAssertionError) as excinfo:
            assert_recursively(Author("a", None), policy).has_no_null_fields()

        message = str(excinfo.value)
        assert "The recursive assertion was performed with this configuration:" in message
        assert "- the map assertion policy was VALUES_ONLY" in message
        assert excinfo.value.policy is policy

    def test_predicates_can_be_chained(self):
        pramod, _, _ = author_graph()

        (
            assert_recursively(pramod)
            .has_no_null_fields()
            .all_fields_satisfy(lambda value: value != "")
        )

    def test_each_predicate_starts_a_fresh_run(self):
        author = Author("a", None)
        assertion = RecursiveAssertion(author)

        for _ in range(2):
            with pytest.raises(RecursiveAssertionError) as excinfo:
                assertion.has_no_null_fields()
            assert len(excinfo.value.failures) == 1

    def test_ignored_null_fields_pass(self):
        policy = AssertionPolicy().ignoring_all_null_fields()

        assert_recursively(Author("a", None), policy).has_no_null_fields()

    def test_default_policy(self):
        assert RecursiveAssertion(object()).policy == AssertionPolicy()
