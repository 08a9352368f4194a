"""
Expansion (include) paths and the include tree walked by the evaluator.

A path such as ``"subcategories.images.image"`` is a chain of relationship
names, each one off the previous. Registered paths merge into a tree; the
evaluator expands every root-to-leaf path of that tree, depth-first, in
registration order.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Union

IncludePath = tuple[str, ...]

IncludeLike = Union[str, Sequence[str]]


def parse_include(path: IncludeLike) -> IncludePath:
    """
    Normalise a dotted string or a sequence of segments into a path.

    Raises:
        ValueError: If the path is empty or contains an empty segment.
    """
    segments = path.split(".") if isinstance(path, str) else list(path)
    segments = [s.strip() for s in segments]
    if not segments or any(not s for s in segments):
        raise ValueError(f"Invalid include path: {path!r}")
    return tuple(segments)


class IncludeTree:
    """Ordered prefix tree of include paths."""

    __slots__ = ("_children",)

    def __init__(self) -> None:
        # dicts keep insertion order, which is the registration order
        self._children: dict[str, IncludeTree] = {}

    @classmethod
    def from_paths(cls, paths: Sequence[IncludePath]) -> IncludeTree:
        tree = cls()
        for path in paths:
            tree.add(path)
        return tree

    def add(self, path: IncludePath) -> None:
        node = self
        for segment in path:
            node = node._children.setdefault(segment, IncludeTree())

    def leaf_paths(self) -> Iterator[IncludePath]:
        """Yield every full root-to-leaf path, depth-first."""
        for segment, child in self._children.items():
            if not child._children:
                yield (segment,)
                continue
            for rest in child.leaf_paths():
                yield (segment, *rest)

    def __bool__(self) -> bool:
        return bool(self._children)
