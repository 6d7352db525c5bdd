from __future__ import annotations

import math
from typing import Any

from .errors import SelectorMatchError
from .models import Knot, Path
from .search import nth_of_type
from .tree import TreeAdapter


def selector(path: Path) -> str:
    """Render ``path`` (target first, ancestors after) as a CSS selector."""
    if not path:
        raise ValueError("Cannot render an empty selector path.")
    inner = path[0]
    query = inner.name
    for outer in path[1:]:
        if outer.level == inner.level + 1:
            query = f"{outer.name} > {query}"
        else:
            query = f"{outer.name} {query}"
        inner = outer
    return query


def unique_element(path: Path, tree: TreeAdapter, scope: Any) -> Any | None:
    """The single node matched by ``path``, or ``None`` when it is ambiguous."""
    css = selector(path)
    matches = tree.query_all(css, scope)
    if not matches:
        raise SelectorMatchError(css)
    if len(matches) == 1:
        return matches[0]
    return None


def fallback(target: Any, tree: TreeAdapter, scope: Any) -> Path | None:
    """Positional ``tag:nth-of-type(i)`` chain from ``target`` up to the scope."""
    knots: list[Knot] = []
    current: Any | None = target
    level = 0
    while current is not None and not tree.same_node(current, scope):
        tag = tree.tag_name(current)
        index = tree.index_of(current, tag)
        if index is None:
            return None
        knots.append(Knot(nth_of_type(tag, index), math.nan, level))
        current = tree.parent(current)
        level += 1

    path = tuple(knots)
    if not path or unique_element(path, tree, scope) is None:
        return None
    return path
