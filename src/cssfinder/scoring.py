from __future__ import annotations

from typing import Iterable

from .models import Path

PENALTY_ID = 0.0
PENALTY_CLASS = 1.0
PENALTY_ATTRIBUTE = 2.0
PENALTY_TAG_NAME = 5.0
PENALTY_NTH_OF_TYPE = 10.0
PENALTY_NTH_CHILD = 50.0


def penalty(path: Path) -> float:
    return sum(knot.penalty for knot in path)


def sort_by_penalty(paths: Iterable[Path]) -> list[Path]:
    # sorted() is stable: equal penalties keep discovery order.
    return sorted(paths, key=penalty)


def best_path(paths: Iterable[Path]) -> Path:
    ranked = sort_by_penalty(paths)
    if not ranked:
        raise ValueError("best_path() requires at least one path.")
    return ranked[0]
