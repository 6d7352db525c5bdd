"""Finder configuration defaults."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable

from . import selector_rules
from .models import AbortSignal

DEFAULT_TIMEOUT_MS = 1000.0
DEFAULT_SEED_MIN_LENGTH = 3
DEFAULT_OPTIMIZED_MIN_LENGTH = 2
SCHEDULING_STRATEGIES = ("interactive", "smooth", "idle")

NamePredicate = Callable[[str], bool]
AttributePredicate = Callable[[str, str], bool]
YieldPolicy = Callable[[str, "AbortSignal | None"], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class FinderOptions:
    root: Any | None = None
    id_name: NamePredicate = selector_rules.id_name
    class_name: NamePredicate = selector_rules.class_name
    tag_name: NamePredicate = selector_rules.tag_name
    attr: AttributePredicate = selector_rules.attr
    timeout_ms: float = DEFAULT_TIMEOUT_MS
    seed_min_length: int = DEFAULT_SEED_MIN_LENGTH
    optimized_min_length: int = DEFAULT_OPTIMIZED_MIN_LENGTH
    max_number_of_path_checks: float = math.inf
    scheduling_strategy: str | None = "idle"
    yield_policy: YieldPolicy | None = None
    abort_signal: AbortSignal | None = None


def resolve_options(options: FinderOptions | None = None, **overrides: Any) -> FinderOptions:
    resolved = replace(options or FinderOptions(), **overrides)
    if resolved.seed_min_length < 1:
        raise ValueError("seed_min_length must be at least 1.")
    if resolved.optimized_min_length < 0:
        raise ValueError("optimized_min_length must not be negative.")
    if resolved.timeout_ms < 0:
        raise ValueError("timeout_ms must not be negative.")
    if resolved.max_number_of_path_checks < 0:
        raise ValueError("max_number_of_path_checks must not be negative.")
    if resolved.scheduling_strategy is not None and resolved.scheduling_strategy not in SCHEDULING_STRATEGIES:
        raise ValueError(
            f"Unknown scheduling strategy {resolved.scheduling_strategy!r}; "
            f"expected one of {', '.join(SCHEDULING_STRATEGIES)} or None."
        )
    return resolved
