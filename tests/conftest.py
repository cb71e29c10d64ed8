"""Pytest configuration and test helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fieldwalk import AssertionPolicy, GraphTraversalEngine
from fieldwalk.engine import Predicate


@dataclass(eq=False)
class Author:
    name: str
    email: str | None
    books: list[Book] = field(default_factory=list)


@dataclass(eq=False)
class Book:
    title: str
    authors: tuple[Author, ...] = ()


class Node:
    """Plain __dict__ object for building cycles."""

    def __init__(self, name: str, next: Node | None = None) -> None:
        self.name = name
        self.next = next


def author_graph() -> tuple[Author, Author, Author]:
    """Two books shared between three authors, with author <-> book cycles."""
    pramod = Author("Pramod Sadalage", "p.sadalage@recursive.test")
    martin = Author("Martin Fowler", "m.fowler@recursive.test")
    kent = Author("Kent Beck", "k.beck@recursive.test")
    nosql = Book("NoSql Distilled", (pramod, martin))
    pramod.books.append(nosql)
    martin.books.append(nosql)
    refactoring = Book("Refactoring", (martin, kent))
    martin.books.append(refactoring)
    kent.books.append(refactoring)
    return pramod, martin, kent


def failed_paths(
    predicate: Predicate,
    root: Any,
    policy: AssertionPolicy | None = None,
) -> list[str]:
    """Run one fresh traversal and return failing paths as strings.

    Args:
        predicate: Predicate applied to every included node.
        root: Traversal root.
        policy: Policy to use (defaults to AssertionPolicy()).

    Returns:
        Failing locations rendered with str().
    """
    engine = GraphTraversalEngine(policy if policy is not None else AssertionPolicy())
    engine.reset()
    return [str(location) for location in engine.assert_over_graph(predicate, root)]


def visited_values(root: Any, policy: AssertionPolicy | None = None) -> list[tuple[str, Any]]:
    """Return every (path, value) pair handed to the predicate, in order."""
    seen: list[Any] = []

    def record(value: Any) -> bool:
        seen.append(value)
        return False

    paths = failed_paths(record, root, policy)
    return list(zip(paths, seen, strict=True))
