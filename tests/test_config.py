import math

import pytest

from cssfinder import selector_rules
from cssfinder.config import FinderOptions, resolve_options


def test_defaults() -> None:
    options = resolve_options()
    assert options.root is None
    assert options.timeout_ms == 1000
    assert options.seed_min_length == 3
    assert options.optimized_min_length == 2
    assert options.max_number_of_path_checks == math.inf
    assert options.scheduling_strategy == "idle"
    assert options.id_name is selector_rules.id_name
    assert options.attr is selector_rules.attr


def test_overrides_replace_only_named_fields() -> None:
    base = FinderOptions(timeout_ms=50)
    options = resolve_options(base, seed_min_length=1)
    assert options.timeout_ms == 50
    assert options.seed_min_length == 1
    assert base.seed_min_length == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"seed_min_length": 0},
        {"optimized_min_length": -1},
        {"timeout_ms": -1},
        {"max_number_of_path_checks": -5},
        {"scheduling_strategy": "eager"},
    ],
)
def test_invalid_options_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValueError):
        resolve_options(**overrides)


def test_scheduling_can_be_disabled() -> None:
    assert resolve_options(scheduling_strategy=None).scheduling_strategy is None
