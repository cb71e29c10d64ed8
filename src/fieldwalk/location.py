"""Path identifiers for nodes of an object graph."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldLocation:
    """Position of a node relative to the traversal root.

    Segments are field names or synthetic members: ``[i]`` for the i-th
    element of a collection, ``key(<repr>)`` and ``value(<repr>)`` for a
    mapping entry. The root is the empty path.
    """

    segments: tuple[str, ...] = ()

    @classmethod
    def root(cls) -> FieldLocation:
        return cls()

    def field(self, name: str) -> FieldLocation:
        return FieldLocation(self.segments + (name,))

    def element(self, index: int) -> FieldLocation:
        return self.field(f"[{index}]")

    def key(self, key: object) -> FieldLocation:
        return self.field(f"key({key!r})")

    def value(self, key: object) -> FieldLocation:
        return self.field(f"value({key!r})")

    def is_root(self) -> bool:
        return not self.segments

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            # Index segments attach to their container: books[0]
            if parts and not segment.startswith("["):
                parts.append(".")
            parts.append(segment)
        return "".join(parts)
