from __future__ import annotations

import asyncio
import logging
from typing import Any

from .config import FinderOptions, resolve_options
from .errors import (
    BudgetExhaustedError,
    FinderTimeoutError,
    InvalidTargetError,
    SelectorNotFoundError,
)
from .lxml_tree import LxmlTree
from .models import Path, SearchContext
from .optimizer import PathOptimizer
from .resolution import fallback, selector, unique_element
from .scheduling import CooperativeScheduler, raise_if_cancelled
from .scoring import best_path, penalty
from .search import CandidateSearch
from .tree import TreeAdapter

logger = logging.getLogger("cssfinder.finder")


async def finder(
    element: Any,
    options: FinderOptions | None = None,
    *,
    tree: TreeAdapter | None = None,
) -> str:
    """Find a CSS selector that matches ``element`` and nothing else in scope."""
    adapter: TreeAdapter = tree or LxmlTree()
    if not adapter.is_element(element):
        raise InvalidTargetError("Can't generate CSS selector for non-element node type.")
    if adapter.tag_name(element) == "html":
        return "html"

    config = resolve_options(options)
    context = SearchContext(timeout_ms=config.timeout_ms, abort_signal=config.abort_signal)
    scheduler = CooperativeScheduler(config.scheduling_strategy, config.abort_signal, config.yield_policy)
    scope = adapter.resolve_scope(config.root, element)

    found: Path | None = None
    checked = 0
    for candidate in CandidateSearch(element, adapter, scope, config):
        await scheduler.checkpoint()

        timed_out = context.timed_out()
        if timed_out or checked >= config.max_number_of_path_checks:
            logger.info(
                "Search budget spent (checked=%d, elapsed=%.0fms); trying positional fallback.",
                checked,
                context.elapsed_ms(),
            )
            fallback_path = fallback(element, adapter, scope)
            if fallback_path is None:
                if timed_out:
                    raise FinderTimeoutError(context.elapsed_ms(), config.timeout_ms)
                raise BudgetExhaustedError(checked, config.max_number_of_path_checks)
            return selector(fallback_path)

        checked += 1
        if unique_element(candidate, adapter, scope) is not None:
            found = candidate
            break

    if found is None:
        raise SelectorNotFoundError("Selector was not found.")
    logger.debug("Found %r after %d checks (penalty %g).", selector(found), checked, penalty(found))

    variants: list[Path] = [found]
    for variant in PathOptimizer(found, element, adapter, scope, config, context):
        variants.append(variant)
        await scheduler.checkpoint()
    raise_if_cancelled(config.abort_signal)

    best = best_path(variants)
    logger.debug("Chose %r from %d variants.", selector(best), len(variants))
    return selector(best)


def find_selector(
    element: Any,
    options: FinderOptions | None = None,
    *,
    tree: TreeAdapter | None = None,
) -> str:
    return asyncio.run(finder(element, options, tree=tree))
