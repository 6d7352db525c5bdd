from __future__ import annotations

import asyncio
import time
from typing import Callable

from .config import YieldPolicy
from .errors import FinderCancelled
from .models import AbortSignal

# Seconds of uninterrupted work allowed before handing control back to the
# event loop. "idle" yields at every checkpoint.
TIME_SLICES: dict[str, float] = {
    "interactive": 0.083,
    "smooth": 0.013,
    "idle": 0.0,
}


def raise_if_cancelled(abort_signal: AbortSignal | None) -> None:
    if abort_signal is not None and abort_signal.is_set():
        raise FinderCancelled("Selector search was cancelled.")


class CooperativeScheduler:
    """Suspends the finder at safe points so other coroutines can run.

    Suspension only changes interleaving, never the result. Every checkpoint
    also observes the abort signal, even when yielding is disabled.
    """

    def __init__(
        self,
        strategy: str | None,
        abort_signal: AbortSignal | None = None,
        policy: YieldPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.strategy = strategy
        self.abort_signal = abort_signal
        self.policy = policy
        self._clock = clock
        self._slice_started = clock()

    async def checkpoint(self) -> None:
        raise_if_cancelled(self.abort_signal)
        if self.strategy is None:
            return
        if self.policy is not None:
            await self.policy(self.strategy, self.abort_signal)
        else:
            await self._yield_if_slice_spent()
        raise_if_cancelled(self.abort_signal)

    async def _yield_if_slice_spent(self) -> None:
        now = self._clock()
        if now - self._slice_started < TIME_SLICES.get(self.strategy or "idle", 0.0):
            return
        await asyncio.sleep(0)
        self._slice_started = self._clock()
