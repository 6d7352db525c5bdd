from __future__ import annotations

import logging
from typing import Any, Iterator

from .config import FinderOptions
from .models import Path, SearchContext
from .resolution import selector, unique_element
from .tree import TreeAdapter

logger = logging.getLogger("cssfinder.finder")


class PathOptimizer:
    """Yields shorter paths that still select ``target`` and nothing else.

    Interior knots (never the target's own knot, never the outermost one)
    are dropped one at a time. Each successful removal is yielded and then
    explored further before the next index is tried. The iterator stops
    quietly once the shared deadline has passed.
    """

    def __init__(
        self,
        path: Path,
        target: Any,
        tree: TreeAdapter,
        scope: Any,
        options: FinderOptions,
        context: SearchContext,
    ) -> None:
        self._target = target
        self._tree = tree
        self._scope = scope
        self._options = options
        self._context = context
        # Each frame is [path, next interior index to try].
        self._frames: list[list[Any]] = [[path, 1]] if self._eligible(path) else []
        self._tried: set[str] = set()

    def __iter__(self) -> Iterator[Path]:
        return self

    def __next__(self) -> Path:
        while self._frames:
            frame = self._frames[-1]
            path, index = frame
            if index >= len(path) - 1:
                self._frames.pop()
                continue
            if self._context.timed_out():
                logger.debug("Optimization stopped by timeout after %.0fms.", self._context.elapsed_ms())
                self._frames.clear()
                break
            frame[1] = index + 1

            candidate = path[:index] + path[index + 1 :]
            css = selector(candidate)
            if css in self._tried:
                continue
            self._tried.add(css)

            match = unique_element(candidate, self._tree, self._scope)
            if match is not None and self._tree.same_node(match, self._target):
                if self._eligible(candidate):
                    self._frames.append([candidate, 1])
                return candidate
        raise StopIteration

    def _eligible(self, path: Path) -> bool:
        return len(path) > 2 and len(path) > self._options.optimized_min_length
