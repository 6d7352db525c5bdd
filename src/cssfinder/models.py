from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Protocol


class AbortSignal(Protocol):
    def is_set(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Knot:
    """One selector fragment for a single tree level.

    ``level`` is the distance from the target element (0 for the target
    itself); it decides whether neighbouring knots render with ``>`` or a
    descendant combinator.
    """

    name: str
    penalty: float
    level: int = 0


Path = tuple[Knot, ...]


@dataclass(frozen=True, slots=True)
class SearchContext:
    timeout_ms: float
    abort_signal: AbortSignal | None = None
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000.0

    def timed_out(self) -> bool:
        return self.elapsed_ms() > self.timeout_ms

