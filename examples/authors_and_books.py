"""Recursive assertions over a cyclic author/book graph.

Run with ``python examples/authors_and_books.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fieldwalk import (
    AssertionPolicy,
    CollectionAssertionPolicy,
    GraphTraversalEngine,
    RecursiveAssertionError,
    assert_recursively,
)


@dataclass(eq=False)
class Author:
    name: str
    email: str | None
    books: list[Book] = field(default_factory=list)


@dataclass(eq=False)
class Book:
    title: str
    authors: tuple[Author, ...] = ()


def build_graph() -> Author:
    pramod = Author("Pramod Sadalage", "p.sadalage@recursive.test")
    martin = Author("Martin Fowler", None)
    kent = Author("Kent Beck", "k.beck@recursive.test")
    nosql = Book("NoSql Distilled", (pramod, martin))
    pramod.books.append(nosql)
    martin.books.append(nosql)
    refactoring = Book("Refactoring", (martin, kent))
    martin.books.append(refactoring)
    kent.books.append(refactoring)
    return pramod


def main() -> list[str]:
    root = build_graph()

    try:
        assert_recursively(root).has_no_null_fields()
    except RecursiveAssertionError as error:
        print(error)

    # The engine can be driven directly, once per predicate.
    policy = AssertionPolicy().with_collection_policy(CollectionAssertionPolicy.ELEMENTS_ONLY)
    engine = GraphTraversalEngine(policy)
    engine.reset()
    short_titles = engine.assert_over_graph(
        lambda value: not isinstance(value, str) or len(value) > 12, root
    )
    paths = [str(location) for location in short_titles]
    print("Short strings:", ", ".join(paths))
    return paths


if __name__ == "__main__":
    main()
