from __future__ import annotations


class FinderError(Exception):
    """Base class for every failure raised by the selector finder."""


class InvalidTargetError(FinderError, TypeError):
    pass


class FinderTimeoutError(FinderError):
    def __init__(self, elapsed_ms: float, timeout_ms: float) -> None:
        super().__init__(
            f"Timeout: Can't find a unique selector after {timeout_ms:g}ms (elapsed {elapsed_ms:.0f}ms)."
        )
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms


class BudgetExhaustedError(FinderError):
    def __init__(self, checked: int, limit: float) -> None:
        super().__init__(f"Can't find a unique selector after checking {checked} of {limit:g} allowed paths.")
        self.checked = checked
        self.limit = limit


class SelectorNotFoundError(FinderError):
    pass


class SelectorMatchError(FinderError):
    """A generated selector matched nothing; fragment synthesis is broken."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Can't select any node with this selector: {selector}")
        self.selector = selector


class FinderCancelled(FinderError):
    pass
