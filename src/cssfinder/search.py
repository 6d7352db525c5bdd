from __future__ import annotations

from collections import deque
from typing import Any, Iterator, Sequence

from .config import FinderOptions
from .models import Knot, Path
from .scoring import (
    PENALTY_ATTRIBUTE,
    PENALTY_CLASS,
    PENALTY_ID,
    PENALTY_NTH_CHILD,
    PENALTY_NTH_OF_TYPE,
    PENALTY_TAG_NAME,
    sort_by_penalty,
)
from .tree import TreeAdapter


def nth_child(tag: str, index: int) -> str:
    if tag == "html":
        return "html"
    return f"{tag}:nth-child({index})"


def nth_of_type(tag: str, index: int) -> str:
    if tag == "html":
        return "html"
    return f"{tag}:nth-of-type({index})"


def tie(node: Any, tree: TreeAdapter, options: FinderOptions, level: int = 0) -> list[Knot]:
    """All selector fragments that could stand for ``node`` on its own."""
    knots: list[Knot] = []

    element_id = tree.get_id(node)
    if element_id and options.id_name(element_id):
        knots.append(Knot(f"#{tree.escape(element_id)}", PENALTY_ID, level))

    for name in tree.class_names(node):
        if options.class_name(name):
            knots.append(Knot(f".{tree.escape(name)}", PENALTY_CLASS, level))

    for name, value in tree.attributes(node):
        if options.attr(name, value):
            knots.append(Knot(f'[{tree.escape(name)}="{tree.escape(value)}"]', PENALTY_ATTRIBUTE, level))

    tag = tree.tag_name(node)
    if options.tag_name(tag):
        knots.append(Knot(tag, PENALTY_TAG_NAME, level))
        type_index = tree.index_of(node, tag)
        if type_index is not None:
            knots.append(Knot(nth_of_type(tag, type_index), PENALTY_NTH_OF_TYPE, level))

    child_index = tree.index_of(node)
    if child_index is not None:
        knots.append(Knot(nth_child(tag, child_index), PENALTY_NTH_CHILD, level))

    return knots


class Combinations:
    """Every path that takes exactly one knot from each non-empty level.

    Paths come out in the same order as the nested-loop product: the first
    level varies slowest. Levels without knots are skipped, so the knots
    around them end up joined by a descendant combinator.
    """

    def __init__(self, stack: Sequence[Sequence[Knot]]) -> None:
        self._levels = [list(level) for level in stack if level]
        self._work: list[tuple[int, Path]] = [(0, ())] if self._levels else []

    def __iter__(self) -> Iterator[Path]:
        return self

    def __next__(self) -> Path:
        while self._work:
            depth, path = self._work.pop()
            if depth == len(self._levels):
                return path
            for knot in reversed(self._levels[depth]):
                self._work.append((depth + 1, path + (knot,)))
        raise StopIteration


class CandidateSearch:
    """Lazily enumerates candidate paths for ``target``, cheapest first.

    Ancestors are visited from the target towards the scope (exclusive).
    Candidates accumulated so far are released, sorted by penalty, each time
    at least ``seed_min_length`` levels have been walked, and once more when
    the walk reaches the scope. The iterator may be abandoned at any time.
    """

    def __init__(self, target: Any, tree: TreeAdapter, scope: Any, options: FinderOptions) -> None:
        self._tree = tree
        self._scope = scope
        self._options = options
        self._current: Any | None = target
        self._depth = 0
        self._stack: list[list[Knot]] = []
        self._pending: list[Path] = []
        self._ready: deque[Path] = deque()
        self._finished = False

    @property
    def depth(self) -> int:
        return self._depth

    def __iter__(self) -> Iterator[Path]:
        return self

    def __next__(self) -> Path:
        while not self._ready:
            if self._finished:
                raise StopIteration
            if self._current is None or self._tree.same_node(self._current, self._scope):
                self._flush()
                self._finished = True
            else:
                self._climb()
        return self._ready.popleft()

    def _climb(self) -> None:
        self._stack.append(tie(self._current, self._tree, self._options, self._depth))
        self._current = self._tree.parent(self._current)
        self._depth += 1

        self._pending.extend(Combinations(self._stack))
        if self._depth >= self._options.seed_min_length:
            self._flush()

    def _flush(self) -> None:
        self._ready.extend(sort_by_penalty(self._pending))
        self._pending = []
